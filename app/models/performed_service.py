from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlmodel import SQLModel, Field, Relationship

from app.models.base import new_id

if TYPE_CHECKING:
    from app.models.billing import Billing
    from app.models.lesson import Lesson
    from app.models.user import User


class ServiceType(str, Enum):
    LESSON = "LESSON"
    CARE = "CARE"


class PerformedService(SQLModel, table=True):
    __tablename__ = "performed_service"

    id: str = Field(default_factory=new_id, primary_key=True)

    billing_id: str = Field(foreign_key="billing.id", index=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    # the performed service points at the lesson it bills
    service_id: str = Field(foreign_key="lesson.id", index=True)

    amount: float = 0
    service_type: ServiceType = Field(default=ServiceType.LESSON)

    billing: Optional["Billing"] = Relationship(back_populates="services")
    user: Optional["User"] = Relationship()
    lesson: Optional["Lesson"] = Relationship()
