"""Token endpoint response decoding (RFC 6749 Section 5).

Required fields and field shapes are strict; optional fields may be absent.
A missing optional field is never an error, a present field of the wrong
type always is.

Each field decoder takes the JSON object and can be replaced through
``ResponseDecoders``. ``LENIENT_DECODERS`` accepts servers that send
``scope`` as a comma separated string.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from oauth2core.models.errors import (
    ErrorCode,
    MissingOrInvalidTokenError,
    OtherErrorCode,
    error_code_from_string,
)
from oauth2core.models.tokens import (
    AuthenticationError,
    AuthenticationSuccess,
    Token,
    make_token,
)
from oauth2core.primitives.codec import (
    decode_int,
    decode_optional,
    decode_required,
    decode_string,
    decode_string_list,
    load_json_object,
    parse_comma_separated,
)

T = TypeVar("T")

Payload = Mapping[str, Any]
ResponseDecoder = Callable[[Payload], T]


def _token_from(payload: Payload, value_key: str) -> Token:
    token_type = payload.get("token_type")
    value = payload.get(value_key)
    token = None
    if isinstance(token_type, str) and isinstance(value, str):
        token = make_token(token_type, value)
    if token is None:
        raise MissingOrInvalidTokenError(
            f"Expected non-empty 'token_type' and '{value_key}' strings"
        )
    return token


def token_decoder(payload: Payload) -> Token:
    return _token_from(payload, "access_token")


def refresh_token_decoder(payload: Payload) -> Token | None:
    if payload.get("refresh_token") is None:
        return None
    return _token_from(payload, "refresh_token")


def expires_in_decoder(payload: Payload) -> int | None:
    return decode_optional(payload, "expires_in", decode_int)


def scope_decoder(payload: Payload) -> list[str]:
    return decode_optional(payload, "scope", decode_string_list, default=[])


def _string_or_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return parse_comma_separated(value)
    return decode_string_list(value)


def lenient_scope_decoder(payload: Payload) -> list[str]:
    """Decode ``scope`` given either as a list or a comma separated string."""
    return decode_optional(payload, "scope", _string_or_list, default=[])


def error_decoder(payload: Payload) -> ErrorCode | OtherErrorCode:
    return error_code_from_string(decode_required(payload, "error", decode_string))


def error_description_decoder(payload: Payload) -> str | None:
    return decode_optional(payload, "error_description", decode_string)


def error_uri_decoder(payload: Payload) -> str | None:
    return decode_optional(payload, "error_uri", decode_string)


@dataclass(frozen=True)
class ResponseDecoders:
    """Field decoders used to build authentication results."""

    token: ResponseDecoder[Token] = token_decoder
    refresh_token: ResponseDecoder[Token | None] = refresh_token_decoder
    expires_in: ResponseDecoder[int | None] = expires_in_decoder
    scope: ResponseDecoder[list[str]] = scope_decoder
    error: ResponseDecoder[ErrorCode | OtherErrorCode] = error_decoder
    error_description: ResponseDecoder[str | None] = error_description_decoder
    error_uri: ResponseDecoder[str | None] = error_uri_decoder


DEFAULT_DECODERS = ResponseDecoders()
LENIENT_DECODERS = ResponseDecoders(scope=lenient_scope_decoder)


def decode_authentication_success(
    body: Payload | str | bytes, decoders: ResponseDecoders = DEFAULT_DECODERS
) -> AuthenticationSuccess:
    """Decode a successful token response.

    Raises:
        MissingOrInvalidTokenError: If the access or refresh token is malformed
        DecodeError: If the body or any other field has the wrong shape
    """
    payload = load_json_object(body)
    return AuthenticationSuccess(
        token=decoders.token(payload),
        refresh_token=decoders.refresh_token(payload),
        expires_in=decoders.expires_in(payload),
        scope=tuple(decoders.scope(payload)),
    )


def decode_authentication_error(
    body: Payload | str | bytes, decoders: ResponseDecoders = DEFAULT_DECODERS
) -> AuthenticationError:
    """Decode an error token response.

    Raises:
        DecodeError: If ``error`` is missing or any field has the wrong shape
    """
    payload = load_json_object(body)
    return AuthenticationError(
        error=decoders.error(payload),
        error_description=decoders.error_description(payload),
        error_uri=decoders.error_uri(payload),
    )


def authentication_success_decoder(
    decoders: ResponseDecoders = DEFAULT_DECODERS,
) -> Callable[[Any], AuthenticationSuccess]:
    """Bind ``decoders`` into a decoder usable in ``RequestParts``."""

    def decode(body: Any) -> AuthenticationSuccess:
        return decode_authentication_success(body, decoders)

    return decode

