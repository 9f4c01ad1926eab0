"""
Lists API: membership checks, subscribe and unsubscribe.
"""

from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import quote

from klaviyo_client.attributes import outbound
from klaviyo_client.errors import ValidationError
from klaviyo_client.models.lists import ListMember
from klaviyo_client.models.profile import Profile
from klaviyo_client.transport.http import HttpClient


def _list_path(list_id: str, suffix: str) -> str:
    if not list_id:
        raise ValidationError("A list id is required")
    return f"/v2/list/{quote(list_id, safe='')}/{suffix}"


def _identifiers(
    emails: Iterable[str], phone_numbers: Iterable[str], push_tokens: Iterable[str],
) -> dict[str, list[str]]:
    groups = {
        "emails": [e for e in emails if e],
        "phone_numbers": [p for p in phone_numbers if p],
        "push_tokens": [t for t in push_tokens if t],
    }
    return {name: values for name, values in groups.items() if values}


class ListsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    def members(
        self,
        list_id: str,
        emails: Iterable[str] = (),
        phone_numbers: Iterable[str] = (),
        push_tokens: Iterable[str] = (),
    ) -> list[ListMember]:
        """Return which of the given identifiers are members of the list.

        With no identifiers at all, nothing is sent and the result is empty.
        """
        groups = _identifiers(emails, phone_numbers, push_tokens)
        if not groups:
            return []
        params = {name: ",".join(values) for name, values in groups.items()}
        return self._http.execute(
            "GET", _list_path(list_id, "members"), params=params, target=list[ListMember],
        )

    def subscribe(self, list_id: str, profiles: Sequence[Profile]) -> list[ListMember]:
        """Subscribe profiles to a list, honouring the list's opt-in settings."""
        if not profiles:
            return []
        descriptors: list[dict[str, Any]] = []
        for index, profile in enumerate(profiles):
            if not profile.has_identifier():
                raise ValidationError(
                    "Every profile needs an email or a phone number to subscribe",
                    details={"index": index},
                )
            descriptors.append(outbound(profile))
        return self._http.execute(
            "POST", _list_path(list_id, "subscribe"),
            body={"profiles": descriptors}, target=list[ListMember],
        )

    def unsubscribe(
        self,
        list_id: str,
        emails: Iterable[str] = (),
        phone_numbers: Iterable[str] = (),
        push_tokens: Iterable[str] = (),
    ) -> None:
        """Unsubscribe identifiers from a list. A no-op without identifiers."""
        groups = _identifiers(emails, phone_numbers, push_tokens)
        if not groups:
            return
        self._http.execute("DELETE", _list_path(list_id, "subscribe"), body=groups)
