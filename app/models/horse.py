from typing import Optional

from sqlmodel import SQLModel, Field

from app.models.base import new_id


class Horse(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    owner_id: str = Field(foreign_key="user.id", index=True)

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    discipline: Optional[str] = None

    # bounds are checked by the request schemas, not by the database
    age_years: Optional[int] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
