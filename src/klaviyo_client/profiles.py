"""
Profiles API: identify, fetch and update people.
"""

import base64
import json
from typing import Any, Optional
from urllib.parse import quote

from klaviyo_client.attributes import outbound
from klaviyo_client.errors import LogicalFailure, ValidationError
from klaviyo_client.models.profile import Profile
from klaviyo_client.transport.http import CONTENT_HTML, HttpClient

IDENTIFY_SUCCESS = "1"


def _query_value(value: Any) -> Optional[str]:
    """Encode one flat value as a query-string value; None means omit."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _person_path(profile_id: str) -> str:
    if not profile_id:
        raise ValidationError("A profile id is required")
    return f"/v1/person/{quote(profile_id, safe='')}"


class ProfilesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    def identify(self, profile: Profile) -> None:
        """Create or update a profile from its identifier (public key).

        The service answers "1" on success and "0" when it rejects the data.
        """
        if not profile.has_identifier():
            raise ValidationError("Profile needs an email or a phone number to be identified")
        payload = {
            "token": self._http.config.require_public_key(),
            "properties": outbound(profile),
        }
        data = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
        result = self._http.execute(
            "GET",
            "/identify",
            accept=CONTENT_HTML,
            params={"data": data},
            target=str,
            authenticated=False,
        )
        if result.strip() != IDENTIFY_SUCCESS:
            raise LogicalFailure("Klaviyo rejected the identify call", details={"response": result})

    def get(self, profile_id: str) -> Profile:
        return self._http.execute("GET", _person_path(profile_id), target=Profile)

    def update(self, profile: Profile) -> Profile:
        """Push reserved fields and attributes of an existing profile.

        Returns the profile as stored by Klaviyo after the update.
        """
        path = _person_path(profile.id)
        params = {}
        for key, value in outbound(profile).items():
            encoded = _query_value(value)
            if encoded is not None:
                params[key] = encoded
        return self._http.execute("PUT", path, params=params, target=Profile)
