from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, func, select

from app.core.errors import NotFoundError, store_errors
from app.models.billing import Billing
from app.models.performed_service import PerformedService
from app.schemas.billing import BillingRead, BillingWithServices


def _paginated(statement, take: int, skip: int):
    return (
        statement.options(selectinload(Billing.services))
        .order_by(col(Billing.date).desc())
        .offset(skip)
        .limit(take)
    )


@store_errors("Failed to create the billing.")
def create_billing(session: Session, data: Dict[str, Any]) -> BillingRead:
    billing = Billing(**data)
    session.add(billing)
    session.commit()
    session.refresh(billing)
    return BillingRead.model_validate(billing)


@store_errors("Failed to retrieve the list of billings.")
def get_all_billings(session: Session, take: int = 100, skip: int = 0) -> List[BillingRead]:
    billings = session.exec(_paginated(select(Billing), take, skip)).all()
    return [BillingRead.model_validate(b) for b in billings]


@store_errors("Error retrieving the billing by id.")
def get_billing_by_id(session: Session, billing_id: str) -> Optional[BillingRead]:
    billing = session.get(Billing, billing_id)
    if billing is None:
        return None
    return BillingRead.model_validate(billing)


@store_errors("Error retrieving the billing with services.")
def get_billing_with_services(session: Session, billing_id: str) -> Optional[BillingWithServices]:
    """Billing plus its services, each with a user and a lesson summary."""
    statement = (
        select(Billing)
        .where(Billing.id == billing_id)
        .options(
            selectinload(Billing.services).selectinload(PerformedService.user),
            selectinload(Billing.services).selectinload(PerformedService.lesson),
        )
    )
    billing = session.exec(statement).first()
    if billing is None:
        return None
    return BillingWithServices.model_validate(billing)


@store_errors("Failed to update the billing.")
def update_billing(session: Session, billing_id: str, data: Dict[str, Any]) -> BillingRead:
    billing = session.get(Billing, billing_id)
    if billing is None:
        raise NotFoundError("Billing not found")

    for key, value in data.items():
        setattr(billing, key, value)

    session.add(billing)
    session.commit()
    session.refresh(billing)
    return BillingRead.model_validate(billing)


@store_errors("Failed to delete the billing.")
def delete_billing(session: Session, billing_id: str) -> BillingRead:
    billing = session.get(Billing, billing_id)
    if billing is None:
        raise NotFoundError("Billing not found")

    deleted = BillingRead.model_validate(billing)
    session.delete(billing)
    session.commit()
    return deleted


@store_errors("Failed to retrieve billings by date range.")
def get_billings_by_date_range(
    session: Session,
    start_date: datetime,
    end_date: datetime,
    take: int = 100,
    skip: int = 0,
) -> List[BillingRead]:
    statement = select(Billing).where(Billing.date >= start_date, Billing.date <= end_date)
    billings = session.exec(_paginated(statement, take, skip)).all()
    return [BillingRead.model_validate(b) for b in billings]


@store_errors("Failed to retrieve billings for the user.")
def get_billings_by_user_id(
    session: Session,
    user_id: str,
    take: int = 100,
    skip: int = 0,
) -> List[BillingRead]:
    billed = select(PerformedService.billing_id).where(PerformedService.user_id == user_id)
    statement = select(Billing).where(col(Billing.id).in_(billed))
    billings = session.exec(_paginated(statement, take, skip)).all()
    return [BillingRead.model_validate(b) for b in billings]


@store_errors("Failed to get billing count.")
def get_billing_count(session: Session) -> int:
    return session.exec(select(func.count(Billing.id))).one()
