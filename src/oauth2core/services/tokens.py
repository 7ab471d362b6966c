"""Token endpoint transport service.

Executes ``RequestParts`` built by the request builder over httpx. This is
the only module in the package that performs network I/O; retries and
cancellation are left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from oauth2core.models.errors import DecodeError, TokenRequestError, TransportError
from oauth2core.models.requests import RequestParts
from oauth2core.models.tokens import AuthenticationError, AuthenticationSuccess
from oauth2core.primitives.decoders import (
    DEFAULT_DECODERS,
    ResponseDecoders,
    decode_authentication_error,
)

logger = logging.getLogger(__name__)


class OAuth2TokenManager:
    """Performs token endpoint requests (RFC 6749 Sections 4.1.3, 4.4, 6).

    Successful responses are decoded with the decoder carried by the
    request. Error responses (RFC 6749 Section 5.2) surface either as
    ``TokenRequestError`` from ``execute`` or as ``AuthenticationError``
    values from ``authenticate``.
    """

    def __init__(
        self, timeout: float = 30.0, decoders: ResponseDecoders = DEFAULT_DECODERS
    ):
        """Initialize OAuth token manager.

        Args:
            timeout: Default HTTP request timeout in seconds, used when the
                request carries no timeout of its own
            decoders: Decoders for error response bodies
        """
        self.timeout = timeout
        self.decoders = decoders
        self._http_client = httpx.AsyncClient(timeout=timeout)

    async def execute(self, parts: RequestParts) -> Any:
        """Perform ``parts`` and decode a successful response.

        Returns:
            Whatever ``parts.decoder`` produces from the raw response body

        Raises:
            TransportError: If the request could not be performed
            TokenRequestError: If the endpoint answered with a non-2xx status
            DecodeError: If the body is not JSON or has the wrong shape
        """
        logger.debug(f"Sending {parts.method} token request to {parts.url}")

        timeout = parts.timeout if parts.timeout is not None else self.timeout
        try:
            response = await self._http_client.request(
                parts.method,
                parts.url,
                headers=list(parts.headers),
                content=parts.body,
                timeout=timeout,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error during token request: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning(
                f"Token request to {parts.url} failed with {response.status_code}"
            )
            raise TokenRequestError(
                f"Token endpoint returned HTTP {response.status_code}",
                response.status_code,
                response.text,
            )

        result = parts.decoder(response.content)
        logger.info("Token request successful")
        return result

    async def authenticate(
        self, parts: RequestParts
    ) -> AuthenticationSuccess | AuthenticationError:
        """Perform ``parts``, returning RFC 6749 error responses as values.

        Raises:
            TransportError: If the request could not be performed
            TokenRequestError: If a non-2xx body is not an RFC 6749 error
            DecodeError: If a successful body has the wrong shape
        """
        try:
            return await self.execute(parts)
        except TokenRequestError as e:
            try:
                error = decode_authentication_error(e.body, self.decoders)
            except DecodeError:
                raise e
            logger.warning(
                f"Token endpoint returned error {error.error.value}: "
                f"{error.error_description or 'No description provided'}"
            )
            return error

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._http_client.aclose()
