from typing import Optional

from pydantic import Field

from app.models.lesson import LessonStatus
from app.schemas.common import CamelModel, Pagination, PartialUpdate, UTCDatetime, UUIDStr
from app.schemas.horse import HorseSummary
from app.schemas.user import UserSummary


class LessonQuery(Pagination):
    status: Optional[LessonStatus] = None
    start_date: Optional[UTCDatetime] = None
    end_date: Optional[UTCDatetime] = None
    customer_id: Optional[UUIDStr] = None
    monitor_id: Optional[UUIDStr] = None
    id: Optional[UUIDStr] = None


class LessonCreate(CamelModel):
    date: UTCDatetime
    desc: str = Field(min_length=1, max_length=1000)
    status: LessonStatus = LessonStatus.PENDING
    monitor_id: UUIDStr
    customer_id: UUIDStr
    horse_id: UUIDStr


class LessonWithBillingCreate(LessonCreate):
    amount: float = Field(default=0, ge=0)


class LessonUpdate(PartialUpdate):
    id: UUIDStr
    date: Optional[UTCDatetime] = None
    desc: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    status: Optional[LessonStatus] = None
    monitor_id: Optional[UUIDStr] = None
    customer_id: Optional[UUIDStr] = None
    horse_id: Optional[UUIDStr] = None


class LessonStatusUpdate(CamelModel):
    id: UUIDStr
    status: LessonStatus


class LessonSummary(CamelModel):
    id: str
    date: UTCDatetime
    desc: str
    status: LessonStatus


class LessonRead(LessonSummary):
    customer_id: str
    monitor_id: str
    horse_id: str


class LessonDetail(LessonRead):
    customer: Optional[UserSummary] = None
    monitor: Optional[UserSummary] = None
    horse: Optional[HorseSummary] = None
