from typing import List, Optional

from pydantic import Field, field_validator

from app.models.billing import BillingSituation
from app.schemas.common import CamelModel, Pagination, PartialUpdate, UTCDatetime, UUIDStr
from app.schemas.service import PerformedServiceDetail, PerformedServiceRead


class BillingQuery(Pagination):
    include_services: bool = False
    start_date: Optional[UTCDatetime] = None
    end_date: Optional[UTCDatetime] = None
    id: Optional[UUIDStr] = None
    user_id: Optional[str] = Field(default=None, min_length=1)

    @field_validator("include_services", mode="before")
    @classmethod
    def parse_flag(cls, value):
        if isinstance(value, bool):
            return value
        return str(value).lower() == "true"


class BillingCreate(CamelModel):
    date: UTCDatetime
    situation: BillingSituation = BillingSituation.UNPAYED


class BillingUpdate(PartialUpdate):
    id: UUIDStr
    date: Optional[UTCDatetime] = None
    situation: Optional[BillingSituation] = None


class BillingRead(CamelModel):
    id: str
    date: UTCDatetime
    situation: BillingSituation
    services: List[PerformedServiceRead] = []


class BillingWithServices(BillingRead):
    services: List[PerformedServiceDetail] = []
