"""Request builder for OAuth 2.0 authorization and token endpoints.

Builds authorization URLs (RFC 6749 Section 4.1.1, RFC 7636 Section 4.3) and
token request descriptions (RFC 6749 Sections 4.1.3, 4.4.2, 6). Nothing here
performs I/O: token requests come out as ``RequestParts`` for a transport to
execute.
"""

from __future__ import annotations

import base64
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from oauth2core.models.flow import Authorization, CustomResponseType, ResponseType
from oauth2core.models.requests import (
    Authentication,
    AuthorizationCodeAuthentication,
    ClientCredentialsAuthentication,
    CustomGrantType,
    GrantType,
    RefreshTokenAuthentication,
    RequestParts,
)
from oauth2core.models.security import CODE_CHALLENGE_METHOD
from oauth2core.models.tokens import Credentials
from oauth2core.primitives.codec import space_separated_list

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def normalize_redirect_uri(uri: str) -> str:
    """Re-serialize ``uri`` as ``scheme://host[:port]path[?query]``.

    An empty path becomes ``/``. A port that is not a number is kept as
    written, so this never fails.
    """
    parsed = urlsplit(uri)
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    try:
        port = parsed.port
    except ValueError:
        port = parsed.netloc.rpartition("@")[2].rpartition(":")[2]
    if port is not None:
        host = f"{host}:{port}"
    return urlunsplit((parsed.scheme, host, parsed.path or "/", parsed.query, ""))


def _encode_query(params: list[tuple[str, str]]) -> str:
    return "&".join(
        f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in params
    )


def _append_query(url: str, query: str) -> str:
    parsed = urlsplit(url)
    if parsed.query:
        query = f"{parsed.query}&{query}"
    return urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, query, parsed.fragment)
    )


def build_authorization_url(
    response_type: ResponseType | CustomResponseType,
    extra_fields: Mapping[str, str],
    authorization: Authorization,
) -> str:
    """Build the URL the user agent is sent to.

    Parameters are appended to any query already present on the endpoint.
    When the authorization carries a code challenge, ``code_challenge`` and
    ``code_challenge_method`` are added last and take precedence over extra
    fields with the same name.
    """
    params = [
        ("client_id", authorization.client_id),
        ("redirect_uri", normalize_redirect_uri(authorization.redirect_uri)),
        ("response_type", response_type.value),
    ]
    if authorization.scope:
        params.append(("scope", space_separated_list(authorization.scope)))
    if authorization.state is not None:
        params.append(("state", authorization.state))

    pkce_fields: dict[str, str] = {}
    if authorization.code_challenge is not None:
        pkce_fields = {
            "code_challenge": str(authorization.code_challenge),
            "code_challenge_method": CODE_CHALLENGE_METHOD,
        }

    params.extend(
        (key, value) for key, value in extra_fields.items() if key not in pkce_fields
    )
    params.extend(pkce_fields.items())

    return _append_query(authorization.url, _encode_query(params))


def basic_auth_header(credentials: Credentials) -> tuple[str, str] | None:
    """Return the HTTP Basic ``Authorization`` header, if there is a secret."""
    if credentials.secret is None:
        return None
    raw = f"{credentials.client_id}:{credentials.secret}".encode()
    return ("Authorization", f"Basic {base64.b64encode(raw).decode('ascii')}")


def _grant_fields(authentication: Authentication) -> list[tuple[str, str]]:
    if isinstance(authentication, AuthorizationCodeAuthentication):
        fields = [
            ("code", authentication.code),
            ("redirect_uri", normalize_redirect_uri(authentication.redirect_uri)),
        ]
        if authentication.code_verifier is not None:
            fields.append(("code_verifier", str(authentication.code_verifier)))
        return fields
    if isinstance(authentication, RefreshTokenAuthentication):
        return [("refresh_token", authentication.token.bare_value())]
    if isinstance(authentication, ClientCredentialsAuthentication):
        return []
    raise TypeError(f"Unsupported authentication: {type(authentication).__name__}")


def build_token_request(
    grant_type: GrantType | CustomGrantType,
    decoder: Callable[[Any], Any],
    extra_fields: Mapping[str, str],
    authentication: Authentication,
    mapper: Callable[[Any], Any] | None = None,
    timeout: float | None = None,
) -> RequestParts:
    """Build a token endpoint POST request.

    Args:
        grant_type: Value sent as ``grant_type``
        decoder: Decoder for the raw body of a successful response
        extra_fields: Additional body parameters; they never replace the
            parameters the grant itself defines
        authentication: Per-exchange configuration
        mapper: Optional function applied to the decoded value
        timeout: Optional timeout hint in seconds for the transport

    Returns:
        RequestParts: Immutable request description
    """
    credentials = authentication.credentials

    headers = [
        ("Accept", "application/json"),
        ("Content-Type", FORM_CONTENT_TYPE),
    ]
    auth_header = basic_auth_header(credentials)
    if auth_header is not None:
        headers.append(auth_header)

    fields = [("grant_type", grant_type.value)]
    # Public clients identify themselves in the body (RFC 6749 Section 3.2.1)
    if credentials.secret is None:
        fields.append(("client_id", credentials.client_id))
    fields.extend(_grant_fields(authentication))
    if authentication.scope:
        fields.append(("scope", space_separated_list(authentication.scope)))

    taken = {key for key, _ in fields}
    fields.extend(
        (key, value) for key, value in extra_fields.items() if key not in taken
    )

    if mapper is not None:
        base_decoder = decoder

        def decoder(payload: Any) -> Any:
            return mapper(base_decoder(payload))

    return RequestParts(
        method="POST",
        headers=tuple(headers),
        url=authentication.url,
        body=urlencode(fields, quote_via=quote),
        decoder=decoder,
        timeout=timeout,
    )
