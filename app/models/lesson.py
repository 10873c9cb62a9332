from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlmodel import SQLModel, Field, Relationship

from app.models.base import UTCTimestamp, new_id

if TYPE_CHECKING:
    from app.models.horse import Horse
    from app.models.user import User


class LessonStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class Lesson(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    date: datetime = Field(sa_type=UTCTimestamp, index=True)
    desc: str

    status: LessonStatus = Field(default=LessonStatus.PENDING, index=True)

    customer_id: str = Field(foreign_key="user.id", index=True)
    monitor_id: str = Field(foreign_key="user.id", index=True)
    horse_id: str = Field(foreign_key="horse.id", index=True)

    customer: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Lesson.customer_id"}
    )
    monitor: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Lesson.monitor_id"}
    )
    horse: Optional["Horse"] = Relationship()
