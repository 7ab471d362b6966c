"""Redirect parsing for the authorization code flow.

Classifies the query of the URL the authorization server redirected to as
empty, success (RFC 6749 Section 4.1.2) or error (Section 4.1.2.1). Every
field parser can be replaced through ``QueryParsers``; callers typically
override one field with ``dataclasses.replace(DEFAULT_PARSERS, ...)``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar
from urllib.parse import parse_qs, urlsplit

from oauth2core.models.errors import ErrorCode, OtherErrorCode, error_code_from_string
from oauth2core.models.flow import (
    AuthorizationEmpty,
    AuthorizationError,
    AuthorizationResult,
    AuthorizationSuccess,
)
from oauth2core.primitives.codec import parse_space_separated

T = TypeVar("T")

Query = dict[str, list[str]]
QueryParser = Callable[[Query], T]


def parse_query(url: str) -> Query:
    return parse_qs(urlsplit(url).query, keep_blank_values=True)


def _first(query: Query, key: str) -> str | None:
    values = query.get(key)
    return values[0] if values else None


def state_parser(query: Query) -> str | None:
    return _first(query, "state")


def error_description_parser(query: Query) -> str | None:
    return _first(query, "error_description")


def error_uri_parser(query: Query) -> str | None:
    return _first(query, "error_uri")


def space_separated_list_parser(key: str) -> QueryParser[list[str]]:
    """Build a parser reading ``key`` as a space separated list."""

    def parse(query: Query) -> list[str]:
        return parse_space_separated(_first(query, key) or "")

    return parse


def default_code_parser(query: Query) -> str | None:
    # A blank code is as good as no code
    return _first(query, "code") or None


def default_error_parser(query: Query) -> ErrorCode | OtherErrorCode | None:
    raw = _first(query, "error")
    if not raw:
        return None
    return error_code_from_string(raw)


def default_authorization_success_parser(
    code: str,
) -> QueryParser[AuthorizationSuccess]:
    def parse(query: Query) -> AuthorizationSuccess:
        return AuthorizationSuccess(code=code, state=state_parser(query))

    return parse


def default_authorization_error_parser(
    error: ErrorCode | OtherErrorCode,
) -> QueryParser[AuthorizationError]:
    def parse(query: Query) -> AuthorizationError:
        return AuthorizationError(
            error=error,
            error_description=error_description_parser(query),
            error_uri=error_uri_parser(query),
            state=state_parser(query),
        )

    return parse


@dataclass(frozen=True)
class QueryParsers:
    """Field parsers used to classify a redirect."""

    code_parser: QueryParser[str | None] = default_code_parser
    error_parser: QueryParser[ErrorCode | OtherErrorCode | None] = (
        default_error_parser
    )
    authorization_success_parser: Callable[
        [str], QueryParser[AuthorizationSuccess]
    ] = default_authorization_success_parser
    authorization_error_parser: Callable[
        [ErrorCode | OtherErrorCode], QueryParser[AuthorizationError]
    ] = default_authorization_error_parser


DEFAULT_PARSERS = QueryParsers()


def classify_query(
    query: Query, parsers: QueryParsers = DEFAULT_PARSERS
) -> AuthorizationResult:
    """Classify an already parsed query.

    ``code`` is looked at before ``error``: a query carrying both is a
    success.
    """
    code = parsers.code_parser(query)
    if code is not None:
        return parsers.authorization_success_parser(code)(query)

    error = parsers.error_parser(query)
    if error is not None:
        return parsers.authorization_error_parser(error)(query)

    return AuthorizationEmpty()


def classify(url: str, parsers: QueryParsers = DEFAULT_PARSERS) -> AuthorizationResult:
    """Classify the URL the user agent was redirected to."""
    return classify_query(parse_query(url), parsers)
