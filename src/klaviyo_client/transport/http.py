"""
REST HTTP pipeline for the Klaviyo API.

Builds one request, sends it, classifies the response by status code and
content type, and decodes the body into the caller's target type.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from klaviyo_client.attributes import split
from klaviyo_client.config import ClientConfig
from klaviyo_client.errors import DecodeError, RemoteError, TransportError, TypeMismatchError
from klaviyo_client.models.error import ApiError
from klaviyo_client.models.profile import Profile

logger = logging.getLogger(__name__)

USER_AGENT = "klaviyo-client/0.1.0"

CONTENT_JSON = "application/json"
CONTENT_HTML = "text/html"
CONTENT_TEXT = "text/plain"
TEXT_TYPES = (CONTENT_HTML, CONTENT_TEXT)

API_KEY_PARAM = "api_key"


def _media_type(resp: httpx.Response) -> str:
    return resp.headers.get("content-type", "").split(";")[0].strip().lower()


class HttpClient:
    def __init__(self, config: ClientConfig, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url.rstrip("/"),
            headers={"User-Agent": USER_AGENT},
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def execute(
        self,
        method: str,
        path: str,
        *,
        accept: str = CONTENT_JSON,
        params: Optional[dict[str, str]] = None,
        body: Any = None,
        target: Any = None,
        authenticated: bool = True,
    ) -> Any:
        """Perform one round trip and decode the response.

        `target` selects the decoding: None returns the parsed JSON as is,
        `Profile` goes through the attribute split, `str` is required for
        text responses, and any other type is validated with pydantic.
        """
        query = dict(params or {})
        if authenticated:
            query[API_KEY_PARAM] = self._config.require_private_key()

        logger.debug("%s %s params=%s", method, path, sorted(k for k in query if k != API_KEY_PARAM))
        try:
            resp = self._client.request(
                method,
                path,
                params=query,
                json=body,
                headers={"Accept": accept},
            )
        except httpx.TransportError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        logger.debug("%s %s -> HTTP %s", method, path, resp.status_code)

        if resp.status_code != httpx.codes.OK:
            raise RemoteError(self._decode_error(resp))
        return self._decode(resp, target)

    @staticmethod
    def _decode_error(resp: httpx.Response) -> ApiError:
        """Best effort: a JSON {message, detail} body, else the raw text."""
        raw = resp.text
        message = detail = None
        if _media_type(resp) == CONTENT_JSON:
            try:
                data = resp.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                if isinstance(data.get("message"), str):
                    message = data["message"]
                if isinstance(data.get("detail"), str):
                    detail = data["detail"]
        return ApiError(status_code=resp.status_code, message=message, detail=detail, raw=raw)

    @staticmethod
    def _decode(resp: httpx.Response, target: Any) -> Any:
        media = _media_type(resp)
        if media in TEXT_TYPES:
            if target is not str:
                raise TypeMismatchError(f"{media} response can only be read into str, not {target!r}")
            return resp.text
        if media != CONTENT_JSON:
            raise DecodeError(f"Unsupported content type {media!r}", details={"raw": resp.text})

        if not resp.content:
            data = None
        else:
            try:
                data = resp.json()
            except ValueError as e:
                raise DecodeError(f"Malformed JSON response: {e}", details={"raw": resp.text}) from e

        if target is None:
            return data
        if target is Profile:
            return split(data)
        try:
            return TypeAdapter(target).validate_python(data)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Response does not match {target!r} ({e.error_count()} error(s))",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

    def close(self) -> None:
        self._client.close()
