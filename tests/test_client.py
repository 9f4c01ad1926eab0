"""Tests for the Klaviyo client endpoints, using httpx.MockTransport."""

import base64
import json

import httpx
import pytest

from klaviyo_client import (
    ConfigurationError,
    Klaviyo,
    ListMember,
    LogicalFailure,
    Profile,
    RemoteError,
    ValidationError,
    parse_bool,
)

PERSON = {
    "object": "person",
    "id": "01KITTY",
    "$email": "kitty@example.com",
    "$first_name": "Kitty",
    "$consent": ["email"],
    "$latitude": "",
    "$ios_push_token": "abc",
    "LikesGold": "true",
}


def html(body: str) -> httpx.Response:
    return httpx.Response(200, text=body, headers={"content-type": "text/html; charset=utf-8"})


class TestIdentify:
    def test_sends_base64_payload_with_public_key(self, make_client):
        client, recorder = make_client(html("1"))
        client.profiles.identify(Profile(email="kitty@example.com", first_name="Kitty",
                                         attributes={"IsTest": True}))

        request = recorder.last
        assert request.method == "GET"
        assert request.url.path == "/api/identify"
        assert "api_key" not in request.url.params
        payload = json.loads(base64.b64decode(request.url.params["data"]))
        assert payload["token"] == "PUB123"
        assert payload["properties"] == {
            "$email": "kitty@example.com",
            "$first_name": "Kitty",
            "IsTest": True,
        }

    def test_zero_is_a_logical_failure(self, make_client):
        client, _ = make_client(html("0"))
        with pytest.raises(LogicalFailure) as exc:
            client.profiles.identify(Profile(email="kitty@example.com"))
        assert exc.value.details == {"response": "0"}

    def test_requires_identifier(self, make_client):
        client, recorder = make_client()
        with pytest.raises(ValidationError):
            client.profiles.identify(Profile(first_name="Kitty", phone_number="  "))
        assert recorder.requests == []

    def test_requires_public_key(self, make_client):
        client, recorder = make_client(public_key=None)
        with pytest.raises(ConfigurationError):
            client.profiles.identify(Profile(email="kitty@example.com"))
        assert recorder.requests == []

    def test_phone_number_alone_is_enough(self, make_client):
        client, recorder = make_client(html("1"))
        client.profiles.identify(Profile(phone_number="+1234567890"))
        payload = json.loads(base64.b64decode(recorder.last.url.params["data"]))
        assert payload["properties"] == {"$phone_number": "+1234567890"}


class TestGetProfile:
    def test_decodes_person(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=PERSON))
        p = client.profiles.get("01KITTY")

        assert recorder.last.url.path == "/api/v1/person/01KITTY"
        assert recorder.last.url.params["api_key"] == "pk_test"
        assert p.id == "01KITTY"
        assert p.object_kind == "person"
        assert p.email == "kitty@example.com"
        assert p.consent == ["email"]
        assert p.latitude is None
        assert p.attributes == {"LikesGold": "true"}
        assert parse_bool(p.attributes, "LikesGold")

    def test_id_is_escaped(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=PERSON))
        client.profiles.get("a/b")
        assert recorder.last.url.raw_path.startswith(b"/api/v1/person/a%2Fb")

    def test_empty_id_is_rejected(self, make_client):
        client, recorder = make_client()
        with pytest.raises(ValidationError):
            client.profiles.get("")
        assert recorder.requests == []

    def test_not_found(self, make_client):
        client, _ = make_client(httpx.Response(404, json={"status": 404, "message": "Person not found"}))
        with pytest.raises(RemoteError) as exc:
            client.profiles.get("missing")
        assert exc.value.status_code == 404
        assert exc.value.message == "Person not found"

    def test_missing_private_key(self, make_client):
        client, recorder = make_client(private_key=None)
        with pytest.raises(ConfigurationError):
            client.profiles.get("01KITTY")
        assert recorder.requests == []


class TestUpdateProfile:
    def test_sends_flat_profile_as_query_parameters(self, make_client):
        updated = {**PERSON, "LikesGold": "false", "Visits": 4}
        client, recorder = make_client(httpx.Response(200, json=updated))
        p = Profile(id="01KITTY", object_kind="person", email="kitty@example.com",
                    consent=["email", "web"], latitude=49.5,
                    attributes={"LikesGold": False, "Visits": 4, "Nick": "kit", "Gone": None})

        result = client.profiles.update(p)

        request = recorder.last
        assert request.method == "PUT"
        assert request.url.path == "/api/v1/person/01KITTY"
        params = dict(request.url.params)
        assert params == {
            "api_key": "pk_test",
            "$email": "kitty@example.com",
            "$consent": '["email", "web"]',
            "$latitude": "49.5",
            "LikesGold": "false",
            "Visits": "4",
            "Nick": "kit",
        }
        assert result.attributes == {"LikesGold": "false", "Visits": 4}
        assert not parse_bool(result.attributes, "LikesGold")

    def test_consent_appended_in_place_is_sent(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=PERSON))
        p = Profile(id="01KITTY", email="kitty@example.com")
        p.consent.append("web")
        client.profiles.update(p)
        assert recorder.last.url.params["$consent"] == '["web"]'

    def test_requires_id(self, make_client):
        client, recorder = make_client()
        with pytest.raises(ValidationError):
            client.profiles.update(Profile(email="kitty@example.com"))
        assert recorder.requests == []


class TestListMembers:
    def test_short_circuits_without_identifiers(self, make_client):
        client, recorder = make_client()
        assert client.lists.members("L1", [], [], []) == []
        assert client.lists.members("L1", emails=["", ""]) == []
        assert recorder.requests == []

    def test_joins_identifiers(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=[
            {"id": "01KITTY", "email": "kitty@example.com", "created": "2019-01-01 00:00:00"},
        ]))
        members = client.lists.members("L1", emails=["kitty@example.com", "dev@example.com"],
                                       push_tokens=["tok"])

        params = dict(recorder.last.url.params)
        assert recorder.last.url.path == "/api/v2/list/L1/members"
        assert params == {"emails": "kitty@example.com,dev@example.com", "push_tokens": "tok", "api_key": "pk_test"}
        assert members == [ListMember(id="01KITTY", email="kitty@example.com", created="2019-01-01 00:00:00")]
        assert members[0].phone_number == ""

    def test_not_a_member(self, make_client):
        client, _ = make_client(httpx.Response(200, json=[]))
        assert client.lists.members("L1", emails=["dev@example.com"]) == []


class TestSubscribe:
    def test_posts_profile_descriptors(self, make_client, kitty):
        client, recorder = make_client(httpx.Response(200, json=[
            {"id": "01KITTY", "email": "kitty@example.com", "phone_number": "+1234567890"},
        ]))
        members = client.lists.subscribe("L1", [kitty])

        request = recorder.last
        assert request.method == "POST"
        assert request.url.path == "/api/v2/list/L1/subscribe"
        assert request.url.params["api_key"] == "pk_test"
        body = recorder.last_json()
        descriptor = body["profiles"][0]
        assert "id" not in descriptor and "object" not in descriptor
        assert descriptor["$email"] == "kitty@example.com"
        assert descriptor["$consent"] == ["email", "sms"]
        assert descriptor["IsTest"] is True
        assert "$title" not in descriptor
        assert members[0].id == "01KITTY"

    def test_every_profile_needs_identifier(self, make_client, kitty):
        client, recorder = make_client()
        with pytest.raises(ValidationError) as exc:
            client.lists.subscribe("L1", [kitty, Profile(first_name="Nobody")])
        assert exc.value.details == {"index": 1}
        assert recorder.requests == []

    def test_empty_is_a_no_op(self, make_client):
        client, recorder = make_client()
        assert client.lists.subscribe("L1", []) == []
        assert recorder.requests == []


class TestUnsubscribe:
    def test_deletes_with_identifier_arrays(self, make_client):
        client, recorder = make_client(httpx.Response(200, content=b"", headers={"content-type": "application/json"}))
        client.lists.unsubscribe("L1", emails=["kitty@example.com"], phone_numbers=["+1234567890"])

        request = recorder.last
        assert request.method == "DELETE"
        assert request.url.path == "/api/v2/list/L1/subscribe"
        assert recorder.last_json() == {"emails": ["kitty@example.com"], "phone_numbers": ["+1234567890"]}

    def test_empty_is_a_no_op(self, make_client):
        client, recorder = make_client()
        client.lists.unsubscribe("L1")
        assert recorder.requests == []

    def test_requires_list_id(self, make_client):
        client, _ = make_client()
        with pytest.raises(ValidationError):
            client.lists.unsubscribe("", emails=["kitty@example.com"])


def test_from_env(monkeypatch):
    monkeypatch.setenv("KLAVIYO_PRIVATE_KEY", "pk_env")
    monkeypatch.delenv("KLAVIYO_BASE_URL", raising=False)
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=PERSON)

    with Klaviyo.from_env(transport=httpx.MockTransport(handler)) as client:
        client.profiles.get("01KITTY")
    assert seen[0].url.params["api_key"] == "pk_env"
