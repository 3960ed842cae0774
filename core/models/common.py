# =============================================================================
# core/models/common.py - Shared Field Types
# =============================================================================
# Reusable annotated types and base classes for the record schemas:
# - RequiredText: non-blank string (trimmed)
# - OptionalText: blank strings become null
# - OptionalDate / RequiredDate: YYYY-MM-DD strings that are real dates
# - RecordUpdate: base for partial updates (PUT)
# =============================================================================

import re
from datetime import date
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, StringConstraints

from lib.utils import blank_to_none

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def check_date_format(value: str | None) -> str | None:
    """Accept None or a real calendar date written as YYYY-MM-DD."""
    if value is None:
        return None
    if not DATE_PATTERN.match(value):
        raise ValueError("must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError("must be a valid calendar date")
    return value


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]

RequiredDate = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1), AfterValidator(check_date_format)]

OptionalDate = Annotated[str | None, BeforeValidator(blank_to_none), AfterValidator(check_date_format)]


class RecordUpdate(BaseModel):
    """
    Base for partial updates.

    Only fields the client actually sent are written. Fields listed in
    REQUIRED_FIELDS can't be cleared: a null/blank value for them is
    ignored rather than stored. Every other field may be set to null.
    """

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ()

    # Clients may echo back the id they are editing; it's resolved separately
    id: str | None = None

    model_config = ConfigDict(extra="ignore")

    def to_update_data(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude_unset=True, exclude={"id"})
        for field in self.REQUIRED_FIELDS:
            if data.get(field) is None:
                data.pop(field, None)
        return data
