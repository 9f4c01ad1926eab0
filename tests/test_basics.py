"""Basic unit tests for klaviyo-client package."""

from klaviyo_client import (
    Klaviyo,
    KlaviyoError,
    ConfigurationError,
    TransportError,
    RemoteError,
    DecodeError,
    TypeMismatchError,
    LogicalFailure,
    ValidationError,
    ApiError,
    Consent,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert Klaviyo is not None


def test_error_hierarchy():
    for cls in (ConfigurationError, TransportError, RemoteError, DecodeError,
                TypeMismatchError, LogicalFailure, ValidationError):
        assert issubclass(cls, KlaviyoError)


def test_error_attributes():
    err = KlaviyoError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    err_with_details = ValidationError("no identifier", details={"index": 2})
    assert err_with_details.code == "validation_error"
    assert err_with_details.details == {"index": 2}


def test_remote_error_carries_api_error():
    api_error = ApiError(status_code=404, detail="Person not found", raw='{"detail": "Person not found"}')
    err = RemoteError(api_error)
    assert err.code == "remote_error"
    assert err.status_code == 404
    assert str(err) == "Person not found"
    assert err.api_error is api_error


def test_consent_constants():
    assert Consent.EMAIL == "email"
    assert Consent.DIRECT_MAIL == "directmail"
    assert {c.value for c in Consent} == {"email", "web", "sms", "directmail", "mobile"}
