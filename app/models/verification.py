from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.base import UTCTimestamp, new_id, utcnow


class Verification(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    identifier: str = Field(index=True)  # email
    value: str = Field(index=True)
    expires_at: datetime = Field(sa_type=UTCTimestamp)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCTimestamp)
