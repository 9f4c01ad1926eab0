"""
Error body returned by Klaviyo on non-success responses.
"""

from typing import Optional

from pydantic import BaseModel


class ApiError(BaseModel):
    status_code: int = 0
    message: Optional[str] = None
    detail: Optional[str] = None
    raw: str = ""

    @property
    def reason(self) -> str:
        """`message` when present, else `detail`, else the raw body."""
        return self.message or self.detail or self.raw
