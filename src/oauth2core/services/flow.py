"""OAuth 2.0 flow front door.

Bundles the request builder, redirect parsers and response decoders behind
one object per client configuration. Every method is pure: token requests
are returned as ``RequestParts`` and executed elsewhere, for example by
``OAuth2TokenManager``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from oauth2core.models.flow import (
    Authorization,
    AuthorizationResult,
    CustomResponseType,
    ResponseType,
)
from oauth2core.models.requests import (
    Authentication,
    AuthorizationCodeAuthentication,
    ClientCredentialsAuthentication,
    CustomGrantType,
    GrantType,
    RefreshTokenAuthentication,
    RequestParts,
)
from oauth2core.primitives.decoders import (
    DEFAULT_DECODERS,
    ResponseDecoders,
    authentication_success_decoder,
)
from oauth2core.primitives.query import DEFAULT_PARSERS, QueryParsers, classify
from oauth2core.primitives.requests import build_authorization_url, build_token_request

logger = logging.getLogger(__name__)


class OAuth2FlowManager:
    """Builds and interprets the messages of OAuth 2.0 client flows.

    Supports:
    - Authorization code grant, with or without PKCE (RFC 6749 4.1, RFC 7636)
    - Refresh token grant (RFC 6749 Section 6)
    - Client credentials grant (RFC 6749 Section 4.4)
    - Extension grants through ``make_token_request_with``
    """

    def __init__(
        self,
        parsers: QueryParsers = DEFAULT_PARSERS,
        decoders: ResponseDecoders = DEFAULT_DECODERS,
        timeout: float | None = None,
    ):
        """Initialize the flow manager.

        Args:
            parsers: Redirect query parsers
            decoders: Token response field decoders
            timeout: Timeout hint in seconds attached to token requests
        """
        self.parsers = parsers
        self.decoders = decoders
        self.timeout = timeout

    def make_authorization_url(
        self,
        authorization: Authorization,
        response_type: ResponseType | CustomResponseType = ResponseType.CODE,
        extra_fields: Mapping[str, str] | None = None,
    ) -> str:
        """Build the URL the user should visit to grant access."""
        url = build_authorization_url(response_type, extra_fields or {}, authorization)
        logger.debug(
            f"Built authorization URL for client {authorization.client_id} "
            f"(pkce={authorization.code_challenge is not None})"
        )
        return url

    def parse_redirect(self, url: str) -> AuthorizationResult:
        """Classify the URL the authorization server redirected back to."""
        result = classify(url, self.parsers)
        logger.debug(f"Classified redirect as {type(result).__name__}")
        return result

    def make_token_request(
        self,
        authentication: AuthorizationCodeAuthentication,
        extra_fields: Mapping[str, str] | None = None,
    ) -> RequestParts:
        """Exchange an authorization code (and PKCE verifier, if set)."""
        return self.make_token_request_with(
            GrantType.AUTHORIZATION_CODE, authentication, extra_fields
        )

    def make_refresh_token_request(
        self,
        authentication: RefreshTokenAuthentication,
        extra_fields: Mapping[str, str] | None = None,
    ) -> RequestParts:
        return self.make_token_request_with(
            GrantType.REFRESH_TOKEN, authentication, extra_fields
        )

    def make_client_credentials_request(
        self,
        authentication: ClientCredentialsAuthentication,
        extra_fields: Mapping[str, str] | None = None,
    ) -> RequestParts:
        return self.make_token_request_with(
            GrantType.CLIENT_CREDENTIALS, authentication, extra_fields
        )

    def make_token_request_with(
        self,
        grant_type: GrantType | CustomGrantType,
        authentication: Authentication,
        extra_fields: Mapping[str, str] | None = None,
        mapper: Callable[[Any], Any] | None = None,
    ) -> RequestParts:
        """Build a token request for any grant type.

        Args:
            grant_type: Value sent as ``grant_type``
            authentication: Per-exchange configuration
            extra_fields: Additional form parameters
            mapper: Optional function applied to the decoded
                ``AuthenticationSuccess``

        Returns:
            RequestParts: Request for the token endpoint
        """
        parts = build_token_request(
            grant_type,
            authentication_success_decoder(self.decoders),
            extra_fields or {},
            authentication,
            mapper=mapper,
            timeout=self.timeout,
        )
        logger.debug(
            f"Built token request: grant_type={grant_type.value}, "
            f"client_id={authentication.credentials.client_id}, "
            f"endpoint={authentication.url}"
        )
        return parts
