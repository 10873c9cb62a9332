import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from pydantic import ValidationError
from sqlmodel import Session, select

from app.core.responses import failure, server_error, success
from app.database import get_session
from app.models.horse import Horse
from app.schemas.common import flatten_errors, query_params
from app.schemas.horse import HorseCreate, HorseDelete, HorseQuery, HorseRead, HorseUpdate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/horse", tags=["horse"])


def _invalid(exc: ValidationError):
    return failure("Invalid data", 400, errors=flatten_errors(exc))


# =========================
# LIST BY OWNER (or one horse by id)
# =========================
@router.get("")
def list_horses(request: Request, session: Session = Depends(get_session)):
    try:
        params = HorseQuery.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return _invalid(exc)

    try:
        if params.id:
            horse = session.get(Horse, params.id)
            if not horse:
                return failure("Horse not found", 404)
            return success(HorseRead.model_validate(horse))

        horses = session.exec(
            select(Horse).where(Horse.owner_id == params.owner_id)
        ).all()
        return success([HorseRead.model_validate(h) for h in horses])
    except Exception as exc:
        logger.exception("GET /api/horse error")
        return server_error(exc)


# =========================
# CREATE (PUT)
# =========================
@router.put("")
def create_horse(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = HorseCreate.model_validate(payload or {})
    except ValidationError as exc:
        return _invalid(exc)

    try:
        horse = Horse(**data.model_dump())
        session.add(horse)
        session.commit()
        session.refresh(horse)
        return success(HorseRead.model_validate(horse))
    except Exception as exc:
        session.rollback()
        logger.exception("PUT /api/horse error")
        return server_error(exc)


# =========================
# UPDATE (PATCH)
# =========================
@router.patch("")
def update_horse(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = HorseUpdate.model_validate(payload or {})
    except ValidationError as exc:
        return _invalid(exc)

    try:
        horse = session.get(Horse, data.id)
        if not horse:
            return failure("Horse not found", 404)

        for key, value in data.model_dump(exclude_unset=True, exclude={"id"}).items():
            setattr(horse, key, value)

        session.add(horse)
        session.commit()
        session.refresh(horse)
        return success(HorseRead.model_validate(horse))
    except Exception as exc:
        session.rollback()
        logger.exception("PATCH /api/horse error")
        return server_error(exc)


# =========================
# DELETE
# =========================
@router.delete("")
def delete_horse(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = HorseDelete.model_validate(payload or {})
    except ValidationError as exc:
        return _invalid(exc)

    try:
        horse = session.get(Horse, data.id)
        if not horse:
            return failure("Horse not found", 404)

        deleted = HorseRead.model_validate(horse)
        session.delete(horse)
        session.commit()
        return success(deleted)
    except Exception as exc:
        session.rollback()
        logger.exception("DELETE /api/horse error")
        return server_error(exc)
