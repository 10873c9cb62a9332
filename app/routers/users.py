import calendar
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlmodel import Session, col, func, select

from app.core.responses import failure, server_error, success
from app.database import get_session
from app.models.base import utcnow
from app.models.user import Role, User
from app.schemas.common import error_details, query_params
from app.schemas.user import CustomerStats, UserListItem, UserListQuery


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["user"])

CUSTOMER_ROLES = (Role.OWNER, Role.CUSTOMER)
GROWTH_WINDOW_MONTHS = 6


def _months_ago(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def customer_stats(session: Session, now: datetime) -> CustomerStats:
    in_customer_roles = col(User.role).in_(CUSTOMER_ROLES)

    total = session.exec(
        select(func.count(User.id)).where(in_customer_roles)
    ).one()
    recent = session.exec(
        select(func.count(User.id)).where(
            in_customer_roles,
            User.created_at >= _months_ago(now, GROWTH_WINDOW_MONTHS),
        )
    ).one()

    # rounded half up
    percentage = int(recent * 100 / total + 0.5) if total else 0

    return CustomerStats(
        total_customers=total,
        last_six_months_customers=recent,
        percentage_last_six_months=percentage,
    )


# =========================
# GET /api/user?role=MONITOR -> listing
# GET /api/user              -> customer growth
# =========================
@router.get("")
def list_users(request: Request, session: Session = Depends(get_session)):
    params = query_params(request.query_params)

    if "role" in params:
        try:
            query = UserListQuery.model_validate(params)
        except ValidationError as exc:
            return failure("Invalid query parameters", 400, details=error_details(exc))

        try:
            users = session.exec(
                select(User)
                .where(User.role == query.role)
                .order_by(col(User.first_name).asc(), col(User.last_name).asc())
                .offset(query.skip)
                .limit(query.take)
            ).all()
            return success([UserListItem.model_validate(u) for u in users])
        except Exception as exc:
            logger.exception("GET /api/user error")
            return server_error(exc)

    try:
        return success(customer_stats(session, utcnow()))
    except Exception as exc:
        logger.exception("GET /api/user error")
        return server_error(exc)
