import pytest

from oauth2core.models.errors import DecodeError
from oauth2core.primitives.codec import (
    base64url_encode,
    decode_int,
    decode_optional,
    decode_required,
    decode_string,
    decode_string_list,
    load_json_object,
    parse_comma_separated,
    parse_space_separated,
    space_separated_list,
)


class TestBase64Url:
    def test_strips_padding_and_uses_url_alphabet(self) -> None:
        assert base64url_encode(b"\xfb\xff") == "-_8"
        assert base64url_encode(b"") == ""


class TestLists:
    def test_space_separated_round_trip(self) -> None:
        encoded = space_separated_list(["openid", "profile"])

        assert encoded == "openid profile"
        assert parse_space_separated(encoded) == ["openid", "profile"]

    def test_parse_space_separated_drops_empty_items(self) -> None:
        assert parse_space_separated("  a  b ") == ["a", "b"]
        assert parse_space_separated("") == []

    def test_parse_comma_separated(self) -> None:
        assert parse_comma_separated("read,write") == ["read", "write"]
        assert parse_comma_separated("read, write,") == ["read", "write"]


class TestFieldCombinators:
    def test_optional_absent_returns_default(self) -> None:
        assert decode_optional({}, "expires_in", decode_int) is None
        assert decode_optional({"scope": None}, "scope", decode_string_list, []) == []

    def test_optional_present_wrong_type_fails(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_optional({"expires_in": "3600"}, "expires_in", decode_int)

        assert "expires_in" in str(exc_info.value)

    def test_required_absent_fails(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_required({}, "error", decode_string)

        assert "Missing required field 'error'" in str(exc_info.value)

    def test_required_present(self) -> None:
        assert decode_required({"error": "invalid_grant"}, "error", decode_string) == (
            "invalid_grant"
        )

    @pytest.mark.parametrize("value", [1.5, "1", None])
    def test_int_is_strict(self, value: object) -> None:
        with pytest.raises(DecodeError):
            decode_int(value)

    def test_string_list_rejects_mixed_items(self) -> None:
        with pytest.raises(DecodeError):
            decode_string_list(["read", 1])


class TestLoadJsonObject:
    def test_accepts_mapping_str_and_bytes(self) -> None:
        assert load_json_object({"a": 1}) == {"a": 1}
        assert load_json_object('{"a": 1}') == {"a": 1}
        assert load_json_object(b'{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("body", ["not json", "[1, 2]", b'"text"'])
    def test_rejects_non_objects(self, body: object) -> None:
        with pytest.raises(DecodeError):
            load_json_object(body)

    @pytest.mark.parametrize("value", [[1, 2], 5, None, True])
    def test_rejects_already_parsed_non_objects(self, value: object) -> None:
        with pytest.raises(DecodeError):
            load_json_object(value)
