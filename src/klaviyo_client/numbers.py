"""
Lenient numeric decoding.

Klaviyo sometimes sends numeric fields as strings, and sends an empty string
when the field has no value. LenientFloat accepts both shapes.
"""

import re
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

_EDGE_QUOTES = re.compile(r'^"|"$')


def _strip(value: str) -> str:
    # Only one quote is removed at each end; quotes in the middle are kept.
    return _EDGE_QUOTES.sub("", value)


def parse_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = _strip(value)
        if text == "":
            return None
        return float(text)
    raise ValueError(f"expected a number, got {type(value).__name__}")


LenientFloat = Annotated[Optional[float], BeforeValidator(parse_float)]