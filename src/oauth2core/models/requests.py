"""Token request models for OAuth 2.0.

Immutable per-exchange configurations for each supported grant, and the
transport-agnostic ``RequestParts`` description produced from them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from oauth2core.models.security import CodeVerifier
from oauth2core.models.tokens import Credentials, Token


class GrantType(str, Enum):
    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
    CLIENT_CREDENTIALS = "client_credentials"
    PASSWORD = "password"


@dataclass(frozen=True)
class CustomGrantType:
    """Extension grant identified by an absolute URI (RFC 6749 Section 4.5)."""

    value: str


@dataclass(frozen=True)
class AuthorizationCodeAuthentication:
    """Authorization code exchange (RFC 6749 Section 4.1.3).

    Set ``code_verifier`` for a PKCE exchange (RFC 7636 Section 4.5).
    """

    credentials: Credentials
    code: str = field(repr=False)
    url: str  # Token endpoint
    redirect_uri: str
    scope: tuple[str, ...] = ()
    code_verifier: CodeVerifier | None = None


@dataclass(frozen=True)
class RefreshTokenAuthentication:
    """Refresh token exchange (RFC 6749 Section 6)."""

    credentials: Credentials
    token: Token
    url: str
    scope: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClientCredentialsAuthentication:
    """Client credentials grant (RFC 6749 Section 4.4)."""

    credentials: Credentials
    url: str
    scope: tuple[str, ...] = ()


Authentication = (
    AuthorizationCodeAuthentication
    | RefreshTokenAuthentication
    | ClientCredentialsAuthentication
)


@dataclass(frozen=True)
class RequestParts:
    """Fully specified HTTP request, ready for any transport.

    ``decoder`` turns the raw body (bytes) of a successful response into the
    caller's result type, parsing the JSON itself. ``timeout`` is a hint in
    seconds for the transport.
    """

    method: str
    headers: tuple[tuple[str, str], ...]
    url: str
    body: str | None
    decoder: Callable[[Any], Any] = field(repr=False)
    timeout: float | None = None
