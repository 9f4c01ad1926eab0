"""
Klaviyo client error types.

Every failure a call can produce is a KlaviyoError subclass, so callers can
catch the base class or tell "the service rejected my data" apart from
"the service is unreachable".
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from klaviyo_client.models.error import ApiError


class KlaviyoError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ConfigurationError(KlaviyoError):
    """A required credential or endpoint is missing or malformed."""

    def __init__(self, message: str):
        super().__init__("configuration_error", message)


class TransportError(KlaviyoError):
    """The HTTP exchange itself failed (DNS, connect, timeout, ...)."""

    def __init__(self, message: str):
        super().__init__("transport_error", message)


class RemoteError(KlaviyoError):
    """The service answered with a non-success status."""

    def __init__(self, api_error: "ApiError"):
        super().__init__(
            "remote_error",
            api_error.reason,
            details={"status_code": api_error.status_code, "raw": api_error.raw},
        )
        self.api_error = api_error
        self.status_code = api_error.status_code


class DecodeError(KlaviyoError):
    """The response body did not match the expected shape."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("decode_error", message, details)


class TypeMismatchError(KlaviyoError):
    """A text response was requested into a target that cannot hold a string."""

    def __init__(self, message: str):
        super().__init__("type_mismatch", message)


class LogicalFailure(KlaviyoError):
    """The exchange and decode succeeded but the operation was refused."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("logical_failure", message, details)


class ValidationError(KlaviyoError):
    """Caller-supplied data is unusable; raised before any network call."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("validation_error", message, details)
