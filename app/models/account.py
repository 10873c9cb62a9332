from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from app.models.base import UTCTimestamp, new_id, utcnow


class Account(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    account_id: str
    provider_id: str = "credential"  # credential | google | ...
    user_id: str = Field(foreign_key="user.id", index=True)

    password: Optional[str] = None  # hash, never the plain value

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCTimestamp)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCTimestamp)
