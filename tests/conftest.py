import json

import httpx
import pytest

from klaviyo_client import Klaviyo, Profile


class Recorder:
    """MockTransport handler that replays canned responses and keeps requests."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        return self.responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def make_client():
    clients = []

    def _make(*responses: httpx.Response, **kwargs):
        recorder = Recorder(*responses)
        kwargs.setdefault("public_key", "PUB123")
        kwargs.setdefault("private_key", "pk_test")
        client = Klaviyo(transport=httpx.MockTransport(recorder), **kwargs)
        clients.append(client)
        return client, recorder

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def kitty() -> Profile:
    # If you change this please make sure to update the tests!
    return Profile(
        id="01KITTY",
        object_kind="person",
        city="Vancouver",
        consent=["email", "sms"],
        country="Canada",
        email="kitty@example.com",
        first_name="Kitty",
        last_name="Cat",
        organization="Example Records",
        phone_number="+1234567890",
        region="British Columbia",
        latitude=49.2827,
        longitude=-123.1207,
        attributes={"IsTest": True},
    )
