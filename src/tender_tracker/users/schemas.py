from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, StrictBool, StrictStr, field_validator

from ..common.schemas import ApiSchema, reject_null
from ..core.constants import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from ..core.exceptions import ValidationError


class LoginRequest(ApiSchema):
    username: StrictStr = Field(min_length=1)
    password: StrictStr = Field(min_length=1)


class UserCreate(ApiSchema):
    # Password strength rules live in the admin form, not here.
    username: StrictStr = Field(min_length=1)
    password: StrictStr
    is_admin: StrictBool = False


class UserUpdate(ApiSchema):
    # Defaults are not validated, so an omitted field stays unset.
    username: Optional[StrictStr] = Field(default=None, min_length=1)
    password: Optional[StrictStr] = None
    is_admin: Optional[StrictBool] = None

    @field_validator("username", "password", "is_admin", mode="before")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return reject_null(value)


def check_user_form(username: Optional[str], password: Optional[str], confirm_password: Optional[str]) -> None:
    """Admin form rules. ``None`` skips a field (edits that leave it unchanged)."""
    errors = []
    if username is not None and len(username) < MIN_USERNAME_LENGTH:
        errors.append(
            {"field": "username", "message": f"Username must be at least {MIN_USERNAME_LENGTH} characters"}
        )
    if password is not None:
        if len(password) < MIN_PASSWORD_LENGTH:
            errors.append(
                {"field": "password", "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}
            )
        if password != confirm_password:
            errors.append({"field": "confirmPassword", "message": "Passwords do not match"})
    if errors:
        raise ValidationError(errors=errors)
