from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, StrictBool, StrictStr, field_validator

from ..common.datetime_utils import as_utc
from ..common.schemas import ApiSchema, reject_null
from ..core.exceptions import ValidationError

DATE_FIELDS = ("briefing_date", "submission_date")


def _require_date_input(value: Any) -> Any:
    # Only ISO-8601 strings (or datetimes from Python callers); no epoch numbers.
    if isinstance(value, (str, datetime)):
        return value
    raise ValueError("Expected an ISO-8601 date string")


class TenderCreate(ApiSchema):
    tender_number: StrictStr = Field(min_length=1)
    client_name: StrictStr = Field(min_length=1)
    description: StrictStr
    briefing_date: datetime
    submission_date: datetime
    venue: StrictStr
    compulsory_briefing: StrictBool = False

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def _check_date_input(cls, value: Any) -> Any:
        return _require_date_input(value)

    @field_validator(*DATE_FIELDS)
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return as_utc(value)


class TenderUpdate(ApiSchema):
    # Partial patch: omitted fields stay unset, explicit nulls are rejected.
    tender_number: Optional[StrictStr] = Field(default=None, min_length=1)
    client_name: Optional[StrictStr] = Field(default=None, min_length=1)
    description: Optional[StrictStr] = None
    briefing_date: Optional[datetime] = None
    submission_date: Optional[datetime] = None
    venue: Optional[StrictStr] = None
    compulsory_briefing: Optional[StrictBool] = None

    @field_validator("tender_number", "client_name", "description", "venue", "compulsory_briefing", mode="before")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        return reject_null(value)

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def _check_date_input(cls, value: Any) -> Any:
        return _require_date_input(value)

    @field_validator(*DATE_FIELDS)
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return as_utc(value)


def check_date_order(briefing_date: datetime, submission_date: datetime) -> None:
    """Form rule: submission must come strictly after the briefing."""
    if as_utc(submission_date) <= as_utc(briefing_date):
        raise ValidationError(
            errors=[{"field": "submissionDate", "message": "Submission date must be after briefing date"}]
        )
