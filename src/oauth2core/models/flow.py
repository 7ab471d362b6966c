"""Authorization flow models for OAuth 2.0.

Contains the authorization request configuration and the three possible
outcomes of parsing a redirect back from the authorization server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from oauth2core.models.errors import ErrorCode, OtherErrorCode
from oauth2core.models.security import CodeChallenge


class ResponseType(str, Enum):
    """Registered ``response_type`` values (RFC 6749 Section 3.1.1)."""

    CODE = "code"
    TOKEN = "token"


@dataclass(frozen=True)
class CustomResponseType:
    """Extension ``response_type`` (RFC 6749 Section 8.4)."""

    value: str


@dataclass(frozen=True)
class Authorization:
    """Authorization request parameters for one flow attempt.

    Setting ``code_challenge`` turns the request into a PKCE request.
    """

    client_id: str
    url: str  # Authorization endpoint, may already carry a query
    redirect_uri: str
    scope: tuple[str, ...] = ()
    state: str | None = None
    code_challenge: CodeChallenge | None = field(default=None, repr=False)


@dataclass(frozen=True)
class AuthorizationEmpty:
    """No OAuth parameters were present, e.g. on a first page load."""


@dataclass(frozen=True)
class AuthorizationSuccess:
    code: str = field(repr=False)
    state: str | None = None


@dataclass(frozen=True)
class AuthorizationError:
    """Error redirect (RFC 6749 Section 4.1.2.1)."""

    error: ErrorCode | OtherErrorCode
    error_description: str | None = None
    error_uri: str | None = None
    state: str | None = None


AuthorizationResult = AuthorizationEmpty | AuthorizationSuccess | AuthorizationError
