import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import ValidationError
from sqlmodel import Session

from app.core.errors import NotFoundError
from app.core.responses import failure, server_error, success
from app.database import get_session
from app.schemas.billing import BillingCreate, BillingQuery, BillingUpdate
from app.schemas.common import IdParam, error_details, query_params
from app.utils.billing import (
    create_billing,
    delete_billing,
    get_all_billings,
    get_billing_by_id,
    get_billing_count,
    get_billing_with_services,
    get_billings_by_date_range,
    get_billings_by_user_id,
    update_billing,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/billing", tags=["billing"])


# =========================
# LIST / FETCH
# precedence: id > userId > startDate+endDate > all
# =========================
@router.get("")
def list_billings(request: Request, session: Session = Depends(get_session)):
    try:
        params = BillingQuery.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return failure("Invalid query parameters", 400, details=error_details(exc))

    try:
        if params.id:
            if params.include_services:
                billing = get_billing_with_services(session, params.id)
            else:
                billing = get_billing_by_id(session, params.id)

            if billing is None:
                return failure("Billing not found", 404)
            return success(billing)

        if params.user_id:
            billings = get_billings_by_user_id(session, params.user_id, params.take, params.skip)
        elif params.start_date and params.end_date:
            if params.start_date > params.end_date:
                return failure("startDate must be before endDate", 400)
            billings = get_billings_by_date_range(
                session, params.start_date, params.end_date, params.take, params.skip
            )
        else:
            billings = get_all_billings(session, params.take, params.skip)

        return success(billings)
    except Exception as exc:
        logger.exception("GET /api/billing error")
        return server_error(exc)


@router.get("/count")
def count_billings(session: Session = Depends(get_session)):
    try:
        return success(get_billing_count(session))
    except Exception as exc:
        logger.exception("GET /api/billing/count error")
        return server_error(exc)


# =========================
# CREATE
# =========================
@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = BillingCreate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        billing = create_billing(session, data.model_dump())
        return success(billing, status.HTTP_201_CREATED)
    except Exception as exc:
        logger.exception("POST /api/billing error")
        return server_error(exc)


# =========================
# UPDATE
# =========================
@router.put("")
def update(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = BillingUpdate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        billing = update_billing(session, data.id, data.model_dump(exclude_unset=True, exclude={"id"}))
        return success(billing)
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("PUT /api/billing error")
        return server_error(exc)


# =========================
# DELETE
# =========================
@router.delete("")
def delete(request: Request, session: Session = Depends(get_session)):
    try:
        params = IdParam.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return failure("Invalid or missing ID", 400, details=error_details(exc))

    try:
        billing = delete_billing(session, params.id)
        return success(billing, message="Billing deleted successfully")
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("DELETE /api/billing error")
        return server_error(exc)
