from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List

from sqlmodel import SQLModel, Field, Relationship

from app.models.base import UTCTimestamp, new_id

if TYPE_CHECKING:
    from app.models.performed_service import PerformedService


class BillingSituation(str, Enum):
    PAYED = "PAYED"
    UNPAYED = "UNPAYED"


class Billing(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    date: datetime = Field(sa_type=UTCTimestamp, index=True)

    situation: BillingSituation = Field(default=BillingSituation.UNPAYED, index=True)

    # deleting a billing removes its line items
    services: List["PerformedService"] = Relationship(
        back_populates="billing",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
