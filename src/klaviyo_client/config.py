"""
Client configuration: credentials, timeout and the API root.
"""

import os
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from klaviyo_client.errors import ConfigurationError

DEFAULT_BASE_URL = "https://a.klaviyo.com/api"
DEFAULT_TIMEOUT = 10.0

ENV_PUBLIC_KEY = "KLAVIYO_PUBLIC_KEY"
ENV_PRIVATE_KEY = "KLAVIYO_PRIVATE_KEY"
ENV_TIMEOUT = "KLAVIYO_TIMEOUT"
ENV_BASE_URL = "KLAVIYO_BASE_URL"


class ClientConfig(BaseModel):
    """Read-only settings shared by every call of a client.

    The public key is only used by identify; everything else needs the
    private key. A malformed base URL is rejected here rather than on the
    first request.
    """

    model_config = ConfigDict(frozen=True)

    public_key: Optional[str] = None
    private_key: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    base_url: str = DEFAULT_BASE_URL

    def model_post_init(self, __context: Any) -> None:
        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid base URL {self.base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"Invalid base URL {self.base_url!r}: expected an http(s) URL with a host")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from KLAVIYO_* environment variables."""
        values: dict[str, Any] = {
            "public_key": os.environ.get(ENV_PUBLIC_KEY) or None,
            "private_key": os.environ.get(ENV_PRIVATE_KEY) or None,
            "base_url": os.environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
        }
        timeout = os.environ.get(ENV_TIMEOUT)
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError:
                raise ConfigurationError(f"{ENV_TIMEOUT} must be a number, got {timeout!r}")
        values.update(overrides)
        return cls(**values)

    def require_private_key(self) -> str:
        if not self.private_key:
            raise ConfigurationError("A private API key is required for this call")
        return self.private_key

    def require_public_key(self) -> str:
        if not self.public_key:
            raise ConfigurationError("A public API key is required for this call")
        return self.public_key
