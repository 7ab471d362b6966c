import pytest

from oauth2core.models.errors import (
    ErrorCode,
    InvalidTokenError,
    OtherErrorCode,
    error_code_from_string,
    error_code_to_string,
)
from oauth2core.models.tokens import Token, make_token, use_token


class TestToken:
    def test_string_form_and_bare_value(self) -> None:
        token = make_token("Bearer", "xyz")

        assert token is not None
        assert str(token) == "Bearer xyz"
        assert token.bare_value() == "xyz"

    @pytest.mark.parametrize(
        "scheme, value",
        [("", "xyz"), ("Bearer", ""), (None, "xyz"), ("Bearer", None)],
    )
    def test_make_token_rejects_empty_parts(self, scheme, value) -> None:
        assert make_token(scheme, value) is None

    def test_direct_construction_is_validated(self) -> None:
        with pytest.raises(InvalidTokenError):
            Token("Bearer", "")

    def test_repr_hides_value(self) -> None:
        assert "secret-value" not in repr(Token("Bearer", "secret-value"))

    def test_use_token_appends_authorization_header(self) -> None:
        # Arrange
        token = Token("Bearer", "abc")

        # Act
        headers = use_token(token, [("Accept", "application/json")])

        # Assert
        assert headers == (
            ("Accept", "application/json"),
            ("Authorization", "Bearer abc"),
        )


class TestErrorCode:
    def test_known_codes_map_to_enum(self) -> None:
        assert error_code_from_string("invalid_grant") is ErrorCode.INVALID_GRANT
        assert error_code_from_string("access_denied") is ErrorCode.ACCESS_DENIED

    def test_unknown_codes_are_preserved(self) -> None:
        code = error_code_from_string("consent_required")

        assert code == OtherErrorCode("consent_required")
        assert error_code_to_string(code) == "consent_required"

    def test_round_trip_of_all_rfc_codes(self) -> None:
        for code in ErrorCode:
            assert error_code_from_string(error_code_to_string(code)) is code
