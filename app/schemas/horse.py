from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CamelModel


class HorseFields(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    discipline: Optional[str] = None
    age_years: Optional[int] = Field(default=None, ge=0, le=60)
    height_cm: Optional[float] = Field(default=None, ge=0, le=250)
    weight_kg: Optional[float] = Field(default=None, ge=0, le=2000)


class HorseCreate(HorseFields):
    owner_id: str = Field(min_length=1)


class HorseUpdate(HorseFields):
    id: str = Field(min_length=1)
    owner_id: Optional[str] = Field(default=None, min_length=1)

    @field_validator("owner_id")
    @classmethod
    def owner_not_null(cls, value):
        if value is None:
            raise ValueError("ownerId must not be null")
        return value


class HorseDelete(CamelModel):
    id: str = Field(min_length=1)


class HorseQuery(CamelModel):
    owner_id: Optional[str] = Field(default=None, min_length=1)
    id: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def owner_or_id(self):
        if self.owner_id is None and self.id is None:
            raise ValueError("ownerId is required")
        return self


class HorseSummary(CamelModel):
    id: str
    name: Optional[str] = None


class HorseRead(HorseFields):
    id: str
    owner_id: str
