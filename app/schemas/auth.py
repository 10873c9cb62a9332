from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from app.models.user import Role
from app.schemas.common import CamelModel, UTCDatetime
from app.schemas.user import UserRead


class SignUpRequest(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)
    phone: Optional[str] = None
    role: Role = Role.CUSTOMER

    @field_validator("role")
    @classmethod
    def no_self_promotion(cls, value: Role) -> Role:
        if value == Role.ADMIN:
            raise ValueError("role must be one of OWNER, CUSTOMER, MONITOR, CAREGIVER")
        return value


class SignInRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)
    confirm_password: Optional[str] = None
    revoke_other_sessions: bool = False

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            raise ValueError("Passwords do not match")
        return self


class RevokeSessionRequest(CamelModel):
    token: str = Field(min_length=1)


class SessionRead(CamelModel):
    id: str
    token: str
    user_id: str
    expires_at: UTCDatetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: UTCDatetime


class SessionWithUser(CamelModel):
    session: SessionRead
    user: UserRead

