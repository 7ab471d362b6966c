"""Encoding helpers shared by the request builder, query parsers and decoders.

Field shape checks run through pydantic ``TypeAdapter`` in strict mode, so a
JSON ``"3600"`` is never silently accepted where an integer is expected.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from oauth2core.models.errors import DecodeError

T = TypeVar("T")

FieldDecoder = Callable[[Any], T]


def base64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding (RFC 4648 Section 5)."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def space_separated_list(items: Iterable[str]) -> str:
    return " ".join(items)


def parse_space_separated(value: str) -> list[str]:
    return [item for item in value.split(" ") if item]


def parse_comma_separated(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _strict(adapter: TypeAdapter, expected: str) -> FieldDecoder:
    def decode(value: Any) -> Any:
        try:
            return adapter.validate_python(value, strict=True)
        except ValidationError as e:
            raise DecodeError(
                f"Expected {expected}, got {type(value).__name__}"
            ) from e

    return decode


decode_string: FieldDecoder[str] = _strict(TypeAdapter(str), "a string")
decode_int: FieldDecoder[int] = _strict(TypeAdapter(int), "an integer")
decode_string_list: FieldDecoder[list[str]] = _strict(
    TypeAdapter(list[str]), "a list of strings"
)


def decode_optional(
    payload: Mapping[str, Any],
    key: str,
    decoder: FieldDecoder[T],
    default: T | None = None,
) -> T | None:
    """Decode ``payload[key]`` or return ``default`` when it is absent.

    A JSON ``null`` counts as absent. A present value of the wrong shape
    always raises ``DecodeError``.
    """
    value = payload.get(key)
    if value is None:
        return default
    try:
        return decoder(value)
    except DecodeError as e:
        raise DecodeError(f"Invalid field '{key}': {e}") from e


def decode_required(
    payload: Mapping[str, Any], key: str, decoder: FieldDecoder[T]
) -> T:
    """Decode ``payload[key]``, raising ``DecodeError`` when it is absent."""
    if payload.get(key) is None:
        raise DecodeError(f"Missing required field '{key}'")
    try:
        return decoder(payload[key])
    except DecodeError as e:
        raise DecodeError(f"Invalid field '{key}': {e}") from e


def load_json_object(body: Mapping[str, Any] | str | bytes) -> Mapping[str, Any]:
    """Return a JSON object from an already-parsed mapping or a raw body."""
    if isinstance(body, Mapping):
        return body
    if not isinstance(body, (str, bytes, bytearray)):
        raise DecodeError(
            f"Expected a JSON object or raw body, got {type(body).__name__}"
        )
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return data
