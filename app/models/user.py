from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field

from app.models.base import UTCTimestamp, new_id, utcnow


class Role(str, Enum):
    OWNER = "OWNER"
    CUSTOMER = "CUSTOMER"
    MONITOR = "MONITOR"
    ADMIN = "ADMIN"
    CAREGIVER = "CAREGIVER"


class User(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    first_name: str
    last_name: str
    email: str = Field(index=True, unique=True)
    phone: Optional[str] = None

    role: Role = Field(default=Role.CUSTOMER, index=True)

    email_verified: bool = False

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCTimestamp, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCTimestamp)
