"""Token models for OAuth 2.0 (RFC 6749 Section 5).

Contains the token value type and the decoded token endpoint responses.
This package never stores tokens; callers own them after a successful
exchange.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from oauth2core.models.errors import ErrorCode, InvalidTokenError, OtherErrorCode


@dataclass(frozen=True)
class Token:
    """An access or refresh token tagged with its scheme.

    ``str(token)`` is ``"<scheme> <value>"``, ready to be used as an
    ``Authorization`` header value.
    """

    scheme: str
    value: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.scheme or not self.value:
            raise InvalidTokenError("Token scheme and value must be non-empty")

    def __str__(self) -> str:
        return f"{self.scheme} {self.value}"

    def bare_value(self) -> str:
        """Return the token without its scheme, e.g. for a form parameter."""
        return self.value


def make_token(scheme: str | None, value: str | None) -> Token | None:
    """Build a ``Token``, or return None if either part is empty or absent."""
    if not scheme or not value:
        return None
    return Token(scheme, value)


def use_token(
    token: Token, headers: Iterable[tuple[str, str]] = ()
) -> tuple[tuple[str, str], ...]:
    """Return ``headers`` with an ``Authorization`` header for ``token``."""
    return (*headers, ("Authorization", str(token)))


@dataclass(frozen=True)
class Credentials:
    """Client credentials; public clients have no secret."""

    client_id: str
    secret: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class AuthenticationSuccess:
    """Successful token response (RFC 6749 Section 5.1)."""

    token: Token
    refresh_token: Token | None = None
    expires_in: int | None = None  # Seconds
    scope: tuple[str, ...] = ()


@dataclass(frozen=True)
class AuthenticationError:
    """Error token response (RFC 6749 Section 5.2).

    A value, not an exception: it is an expected, well-formed answer.
    """

    error: ErrorCode | OtherErrorCode
    error_description: str | None = None
    error_uri: str | None = None
