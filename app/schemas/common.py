from datetime import datetime
from typing import Annotated, Any, Dict, List

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.models.base import as_utc


UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

UUIDStr = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]

# always aware UTC, serialised with a trailing Z
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Python attributes in snake_case, JSON keys in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    take: int = Field(default=100, ge=1, le=1000)
    skip: int = Field(default=0, ge=0)


class PartialUpdate(CamelModel):
    """Update body: omitted fields are left alone, explicit nulls are refused."""

    @field_validator("*")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class IdParam(CamelModel):
    id: UUIDStr


def query_params(query: Any) -> Dict[str, str]:
    """Drop empty values so missing and blank parameters both get defaults."""
    return {key: value for key, value in query.items() if value != ""}


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc)


def error_details(exc: ValidationError) -> Dict[str, List[str]]:
    details: Dict[str, List[str]] = {}
    for err in exc.errors():
        details.setdefault(_field_name(err["loc"]) or "_errors", []).append(err["msg"])
    return details


def flatten_errors(exc: ValidationError) -> Dict[str, Any]:
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        if err["loc"]:
            field_errors.setdefault(_field_name(err["loc"]), []).append(err["msg"])
        else:
            form_errors.append(err["msg"])
    return {"formErrors": form_errors, "fieldErrors": field_errors}
