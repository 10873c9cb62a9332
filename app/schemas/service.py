from typing import Optional

from pydantic import Field

from app.models.performed_service import ServiceType
from app.schemas.common import CamelModel, PartialUpdate, UUIDStr
from app.schemas.lesson import LessonSummary
from app.schemas.user import UserSummary


class PerformedServiceCreate(CamelModel):
    service_type: ServiceType = ServiceType.LESSON
    billing_id: Optional[UUIDStr] = None
    user_id: UUIDStr
    service_id: UUIDStr
    amount: float = Field(default=0, ge=0)


class PerformedServiceUpdate(PartialUpdate):
    id: UUIDStr
    service_type: Optional[ServiceType] = None
    billing_id: Optional[UUIDStr] = None
    user_id: Optional[UUIDStr] = None
    service_id: Optional[UUIDStr] = None
    amount: Optional[float] = Field(default=None, ge=0)


class PerformedServiceRead(CamelModel):
    id: str
    billing_id: str
    user_id: str
    service_id: str
    amount: float
    service_type: ServiceType


class PerformedServiceDetail(PerformedServiceRead):
    user: Optional[UserSummary] = None
    lesson: Optional[LessonSummary] = None
