"""
Profile (a.k.a. Person) model and the reserved-field table.

Klaviyo stores its own "special" properties next to caller-defined ones in a
single flat object. Special properties carry the `$` sigil on the wire; see
https://help.klaviyo.com/hc/en-us/articles/115005084927 for the list.
"""

from enum import Enum
from operator import attrgetter
from typing import Any, Callable, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

from klaviyo_client.numbers import LenientFloat

SIGIL = "$"
ID_KEY = "id"
OBJECT_KEY = "object"


class Consent(str, Enum):
    EMAIL = "email"
    WEB = "web"
    SMS = "sms"
    DIRECT_MAIL = "directmail"
    MOBILE = "mobile"


_TEXT_FIELDS = (
    "external_id", "email", "phone_number",
    "address1", "address2", "city", "region", "country", "zip",
    "first_name", "last_name", "organization", "title", "image", "timezone", "source",
)


class Profile(BaseModel):
    """A tracked individual: reserved Klaviyo fields plus custom attributes."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: str = ""
    object_kind: str = ""

    external_id: str = ""
    email: str = ""
    phone_number: str = ""

    address1: str = ""
    address2: str = ""
    city: str = ""
    region: str = ""
    country: str = ""
    zip: str = ""
    latitude: LenientFloat = None
    longitude: LenientFloat = None

    first_name: str = ""
    last_name: str = ""
    organization: str = ""
    title: str = ""
    image: str = ""
    timezone: str = ""
    source: str = ""
    consent: list[Consent] = Field(default_factory=list)

    attributes: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("id", "object_kind", *_TEXT_FIELDS, mode="before")
    @classmethod
    def null_as_empty_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("consent", mode="before")
    @classmethod
    def null_as_no_consent(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("attributes")
    @classmethod
    def no_object_keys(cls, value: dict[str, Any]) -> dict[str, Any]:
        taken = sorted(k for k in (ID_KEY, OBJECT_KEY) if k in value)
        if taken:
            raise ValueError(f"attribute keys {taken} are reserved for the profile object")
        return value

    def has_identifier(self) -> bool:
        """An email or phone number is required to identify a profile.

        SMS subscriptions in particular need the phone number.
        """
        return bool(self.email.strip() or self.phone_number.strip())


class ReservedField(NamedTuple):
    name: str
    wire_key: str
    get: Callable[[Profile], Any]


def _consent(profile: Profile) -> list[str]:
    # Entries appended in place skip validation, so coerce them here.
    return [Consent(c).value for c in profile.consent]


def _reserved(name: str, accessor: Optional[Callable[[Profile], Any]] = None) -> ReservedField:
    return ReservedField(name, SIGIL + name, accessor or attrgetter(name))


# Order follows the profile layout above; wire keys must stay unique.
RESERVED_FIELDS: tuple[ReservedField, ...] = (
    ReservedField("external_id", "$id", attrgetter("external_id")),
    _reserved("email"),
    _reserved("phone_number"),
    _reserved("address1"),
    _reserved("address2"),
    _reserved("city"),
    _reserved("region"),
    _reserved("country"),
    _reserved("zip"),
    _reserved("latitude"),
    _reserved("longitude"),
    _reserved("first_name"),
    _reserved("last_name"),
    _reserved("organization"),
    _reserved("title"),
    _reserved("image"),
    _reserved("timezone"),
    _reserved("source"),
    _reserved("consent", _consent),
)
