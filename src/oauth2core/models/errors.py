"""Exception hierarchy and protocol error codes for OAuth 2.0 clients.

Exceptions cover local failures (bad entropy, undecodable bodies, transport
problems). Negative answers from the authorization server are not exceptions:
they are decoded into ``AuthorizationError`` / ``AuthenticationError`` values
that carry an ``ErrorCode``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OAuth2Error(Exception):
    """Base exception for all OAuth 2.0 related errors."""

    pass


class InvalidEntropyError(OAuth2Error):
    """Raised when code verifier entropy is outside the allowed length."""

    pass


class InvalidTokenError(OAuth2Error):
    """Raised when a token is built from an empty scheme or value."""

    pass


class DecodeError(OAuth2Error):
    """Raised when a response body or field does not have the expected shape."""

    pass


class MissingOrInvalidTokenError(DecodeError):
    """Raised when ``token_type`` / ``access_token`` are missing or malformed."""

    pass


class TransportError(OAuth2Error):
    """Raised when the HTTP request could not be performed."""

    pass


class TokenRequestError(OAuth2Error):
    """Raised when the token endpoint answers with a non-success status.

    The raw body is kept so callers can still decode an RFC 6749 error
    response from it.
    """

    def __init__(self, message: str, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class StateValidationError(OAuth2Error):
    """Raised when the OAuth state parameter does not match.

    A mismatch can indicate a CSRF attack or an authorization server issue.
    """

    pass


class ErrorCode(str, Enum):
    """Error identifiers from RFC 6749 Section 4.1.2.1 and Section 5.2."""

    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    ACCESS_DENIED = "access_denied"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"
    INVALID_SCOPE = "invalid_scope"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"


@dataclass(frozen=True)
class OtherErrorCode:
    """Error identifier not defined by RFC 6749, kept verbatim."""

    value: str


def error_code_from_string(raw: str) -> ErrorCode | OtherErrorCode:
    """Map a wire error identifier to an ``ErrorCode``.

    Unknown identifiers never fail; they are wrapped in ``OtherErrorCode``.
    """
    try:
        return ErrorCode(raw)
    except ValueError:
        return OtherErrorCode(raw)


def error_code_to_string(code: ErrorCode | OtherErrorCode) -> str:
    return code.value
