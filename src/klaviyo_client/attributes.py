"""
Attribute merge/split engine.

Klaviyo transmits a profile as one flat JSON object: reserved `$`-prefixed
keys, `id`/`object`, and any number of custom keys side by side. `flatten`
and `split` convert between that shape and `Profile` by walking the explicit
reserved-field table in `klaviyo_client.models.profile`.
"""

import json
from collections.abc import Mapping
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from klaviyo_client.errors import DecodeError
from klaviyo_client.models.profile import (
    ID_KEY,
    OBJECT_KEY,
    RESERVED_FIELDS,
    SIGIL,
    Profile,
)

_TRUE_STRINGS = ("true", "1")


def flatten(profile: Profile) -> dict[str, Any]:
    """Merge reserved fields and custom attributes into one flat mapping.

    Reserved fields overwrite a custom attribute stored under the same key.
    `id` and `object` are always present; callers strip them when the
    endpoint does not accept them.
    """
    flat: dict[str, Any] = dict(profile.attributes)
    flat[ID_KEY] = profile.id
    flat[OBJECT_KEY] = profile.object_kind
    for field in RESERVED_FIELDS:
        flat[field.wire_key] = field.get(profile)
    return flat


def split(flat: Any) -> Profile:
    """Rebuild a Profile from a flat mapping.

    Every `$` key is removed from the attributes, including ones Klaviyo may
    add in the future that are not in the reserved table: the whole sigil
    namespace belongs to Klaviyo. Attributes are always built from scratch.
    """
    if not isinstance(flat, Mapping):
        raise DecodeError(f"expected a JSON object for a profile, got {type(flat).__name__}")
    bad_keys = [key for key in flat if not isinstance(key, str)]
    if bad_keys:
        raise DecodeError(f"profile keys must be strings, got {bad_keys!r}")

    fields: dict[str, Any] = {}
    if ID_KEY in flat:
        fields["id"] = flat[ID_KEY]
    if OBJECT_KEY in flat:
        fields["object_kind"] = flat[OBJECT_KEY]
    for field in RESERVED_FIELDS:
        if field.wire_key in flat:
            fields[field.name] = flat[field.wire_key]

    fields["attributes"] = {
        key: value
        for key, value in flat.items()
        if key not in (ID_KEY, OBJECT_KEY) and not key.startswith(SIGIL)
    }

    try:
        return Profile.model_validate(fields)
    except PydanticValidationError as err:
        raise DecodeError(
            f"profile payload does not match the reserved schema ({err.error_count()} error(s))",
            details={"errors": err.errors(include_url=False, include_context=False)},
        ) from err


def split_json(data: Union[str, bytes]) -> Profile:
    """Decode a JSON document and split it into a Profile."""
    try:
        flat = json.loads(data)
    except ValueError as err:
        raise DecodeError(f"malformed profile JSON: {err}") from err
    return split(flat)


def parse_bool(attributes: Mapping[str, Any], key: str) -> bool:
    """Read a boolean-looking attribute.

    Klaviyo hands booleans back as strings, so "true" and "1" count as true.
    A missing key, any other string and any other type are false.
    """
    value = attributes.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value in _TRUE_STRINGS
    return False


def outbound(profile: Profile) -> dict[str, Any]:
    """Flatten for transmission.

    `id`/`object` are dropped, as are reserved fields with no value so an
    update never blanks a field the caller did not set.
    """
    flat = flatten(profile)
    del flat[ID_KEY], flat[OBJECT_KEY]
    return {
        key: value
        for key, value in flat.items()
        if not (key.startswith(SIGIL) and _is_empty(value))
    }


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []
