"""
Klaviyo: main SDK client.
"""

from typing import Any, Optional

import httpx

from klaviyo_client.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from klaviyo_client.lists import ListsAPI
from klaviyo_client.profiles import ProfilesAPI
from klaviyo_client.transport.http import HttpClient


class Klaviyo:
    """Synchronous Klaviyo client.

    Each call performs at most one round trip. The configuration is
    read-only after construction, so one client can be shared between
    threads.
    """

    def __init__(
        self,
        public_key: Optional[str] = None,
        private_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or ClientConfig(
            public_key=public_key,
            private_key=private_key,
            timeout=timeout,
            base_url=base_url,
        )
        self.http = HttpClient(self.config, transport=transport)
        self.profiles = ProfilesAPI(self.http)
        self.lists = ListsAPI(self.http)

    @classmethod
    def from_env(cls, transport: Optional[httpx.BaseTransport] = None, **overrides: Any) -> "Klaviyo":
        """Client configured from KLAVIYO_* environment variables."""
        return cls(config=ClientConfig.from_env(**overrides), transport=transport)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "Klaviyo":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
