from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from app.models.base import UTCTimestamp, new_id, utcnow


class UserSession(SQLModel, table=True):
    __tablename__ = "session"

    id: str = Field(default_factory=new_id, primary_key=True)

    token: str = Field(index=True, unique=True)
    user_id: str = Field(foreign_key="user.id", index=True)

    expires_at: datetime = Field(sa_type=UTCTimestamp, index=True)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCTimestamp)
