import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import ValidationError
from sqlmodel import Session

from app.core.errors import NotFoundError
from app.core.responses import failure, server_error, success
from app.database import get_session
from app.schemas.common import IdParam, Pagination, error_details, query_params
from app.schemas.service import PerformedServiceCreate, PerformedServiceUpdate
from app.utils.services import (
    create_performed_service,
    delete_performed_service,
    get_all_performed_services,
    update_performed_service,
)


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/services",
    tags=["services"]
)


@router.get("")
def list_services(request: Request, session: Session = Depends(get_session)):
    try:
        params = Pagination.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return failure("Invalid query parameters", 400, details=error_details(exc))

    try:
        return success(get_all_performed_services(session, params.take, params.skip))
    except Exception as exc:
        logger.exception("GET /api/services error")
        return server_error(exc)


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = PerformedServiceCreate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        service = create_performed_service(session, data.model_dump())
        return success(service, status.HTTP_201_CREATED)
    except Exception as exc:
        logger.exception("POST /api/services error")
        return server_error(exc)


@router.put("")
def update(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = PerformedServiceUpdate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        service = update_performed_service(
            session, data.id, data.model_dump(exclude_unset=True, exclude={"id"})
        )
        return success(service)
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("PUT /api/services error")
        return server_error(exc)


@router.delete("")
def delete(request: Request, session: Session = Depends(get_session)):
    try:
        params = IdParam.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return failure("Invalid or missing ID", 400, details=error_details(exc))

    try:
        service = delete_performed_service(session, params.id)
        return success(service, message="Service deleted successfully")
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("DELETE /api/services error")
        return server_error(exc)
