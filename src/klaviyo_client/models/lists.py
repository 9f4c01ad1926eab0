"""
List membership models.
"""

from typing import Any

from pydantic import BaseModel, field_validator


class ListMember(BaseModel):
    """Read-only record returned by list membership and subscribe calls."""

    id: str = ""
    email: str = ""
    phone_number: str = ""
    created: str = ""

    @field_validator("id", "email", "phone_number", "created", mode="before")
    @classmethod
    def null_as_empty_text(cls, value: Any) -> Any:
        return "" if value is None else value
