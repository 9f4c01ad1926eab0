"""
klaviyo-client — Klaviyo SDK for Python.

Identify, fetch and update profiles, and manage list membership.
"""

from klaviyo_client.client import Klaviyo
from klaviyo_client.config import ClientConfig
from klaviyo_client.profiles import ProfilesAPI
from klaviyo_client.lists import ListsAPI
from klaviyo_client.attributes import flatten, split, split_json, parse_bool
from klaviyo_client.errors import (
    KlaviyoError,
    ConfigurationError,
    TransportError,
    RemoteError,
    DecodeError,
    TypeMismatchError,
    LogicalFailure,
    ValidationError,
)
from klaviyo_client.models.profile import Consent, Profile
from klaviyo_client.models.lists import ListMember
from klaviyo_client.models.error import ApiError

__version__ = "0.1.0"
__all__ = [
    "Klaviyo",
    "ClientConfig",
    "ProfilesAPI",
    "ListsAPI",
    "flatten",
    "split",
    "split_json",
    "parse_bool",
    "KlaviyoError",
    "ConfigurationError",
    "TransportError",
    "RemoteError",
    "DecodeError",
    "TypeMismatchError",
    "LogicalFailure",
    "ValidationError",
    "Consent",
    "Profile",
    "ListMember",
    "ApiError",
]
