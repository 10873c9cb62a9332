from typing import Optional

from pydantic import Field

from app.models.user import Role
from app.schemas.common import CamelModel, UTCDatetime


class UserSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str


class UserListItem(UserSummary):
    role: Role


class UserRead(UserListItem):
    phone: Optional[str] = None
    email_verified: bool = False
    created_at: UTCDatetime


class UserListQuery(CamelModel):
    role: Role
    take: int = Field(default=50, ge=1, le=200)
    skip: int = Field(default=0, ge=0)


class CustomerStats(CamelModel):
    total_customers: int
    last_six_months_customers: int
    percentage_last_six_months: int
