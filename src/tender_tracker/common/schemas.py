from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound="ApiSchema")


class ApiSchema(BaseModel):
    """Request payload schema: camelCase on the wire, snake_case in Python.

    Unknown keys (including a client-sent ``id``) are dropped.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @classmethod
    def parse(cls: type[SchemaT], payload: Any) -> SchemaT:
        if not isinstance(payload, dict):
            raise ValidationError(errors=[{"field": "", "message": "Expected a JSON object"}])
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(errors=field_errors(e)) from e

    def present_fields(self) -> dict[str, Any]:
        """Fields the client actually sent (partial updates)."""
        return self.model_dump(exclude_unset=True)


def field_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for err in exc.errors():
        out.append({"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]})
    return out


def reject_null(value: Any) -> Any:
    """For partial-update fields: omitted is fine, an explicit null is not."""
    if value is None:
        raise ValueError("Field may not be null")
    return value
