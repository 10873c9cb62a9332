from typing import Any, Dict, List, Optional

from sqlmodel import Session, col, select

from app.core.errors import NotFoundError, store_errors
from app.models.base import utcnow
from app.models.billing import Billing, BillingSituation
from app.models.performed_service import PerformedService
from app.schemas.service import PerformedServiceRead


@store_errors("Failed to create the service.")
def create_performed_service(session: Session, data: Dict[str, Any]) -> PerformedServiceRead:
    """Without a billing id a fresh UNPAYED billing is opened in the same transaction."""
    data = dict(data)
    if not data.get("billing_id"):
        billing = Billing(date=utcnow(), situation=BillingSituation.UNPAYED)
        session.add(billing)
        session.flush()
        data["billing_id"] = billing.id

    service = PerformedService(**data)
    session.add(service)
    session.commit()
    session.refresh(service)
    return PerformedServiceRead.model_validate(service)


@store_errors("Failed to retrieve the list of services.")
def get_all_performed_services(
    session: Session, take: int = 100, skip: int = 0
) -> List[PerformedServiceRead]:
    statement = (
        select(PerformedService)
        .order_by(col(PerformedService.id).desc())
        .offset(skip)
        .limit(take)
    )
    return [PerformedServiceRead.model_validate(s) for s in session.exec(statement).all()]


@store_errors("Error retrieving the service by id.")
def get_performed_service_by_id(session: Session, service_id: str) -> Optional[PerformedServiceRead]:
    service = session.get(PerformedService, service_id)
    if service is None:
        return None
    return PerformedServiceRead.model_validate(service)


@store_errors("Failed to update the service.")
def update_performed_service(
    session: Session, service_id: str, data: Dict[str, Any]
) -> PerformedServiceRead:
    service = session.get(PerformedService, service_id)
    if service is None:
        raise NotFoundError("Performed service not found")

    for key, value in data.items():
        setattr(service, key, value)

    session.add(service)
    session.commit()
    session.refresh(service)
    return PerformedServiceRead.model_validate(service)


@store_errors("Failed to delete the service.")
def delete_performed_service(session: Session, service_id: str) -> PerformedServiceRead:
    service = session.get(PerformedService, service_id)
    if service is None:
        raise NotFoundError("Performed service not found")

    deleted = PerformedServiceRead.model_validate(service)
    session.delete(service)
    session.commit()
    return deleted
