import base64
import hashlib

import pytest

from oauth2core.models.errors import InvalidEntropyError
from oauth2core.models.security import CodeChallenge
from oauth2core.primitives.pkce import (
    code_challenge_to_string,
    code_verifier_to_string,
    derive_code_challenge,
    derive_code_verifier,
)
from oauth2core.services.security import generate_code_verifier


class TestDeriveCodeVerifier:
    @pytest.mark.parametrize("length", [32, 33, 48, 64, 89, 90])
    def test_accepts_entropy_within_bounds(self, length: int) -> None:
        # Arrange
        entropy = bytes(range(256))[:length]

        # Act
        verifier = code_verifier_to_string(derive_code_verifier(entropy))

        # Assert
        assert "=" not in verifier
        assert "+" not in verifier
        assert "/" not in verifier
        assert 43 <= len(verifier) <= 128

    @pytest.mark.parametrize("length", [0, 1, 31, 91, 128])
    def test_rejects_entropy_outside_bounds(self, length: int) -> None:
        with pytest.raises(InvalidEntropyError):
            derive_code_verifier(b"\xff" * length)

    def test_string_form_is_unpadded_base64url(self) -> None:
        # Arrange - bytes chosen to produce "+" and "/" in standard base64
        entropy = b"\xfb\xff\xbf" * 11

        # Act
        verifier = code_verifier_to_string(derive_code_verifier(entropy))

        # Assert
        expected = base64.b64encode(entropy).decode("ascii")
        expected = expected.rstrip("=").replace("+", "-").replace("/", "_")
        assert verifier == expected
        assert "-" in verifier and "_" in verifier

    def test_repr_does_not_leak_entropy(self) -> None:
        verifier = derive_code_verifier(b"\x01" * 32)

        assert str(verifier) not in repr(verifier)


class TestDeriveCodeChallenge:
    def test_matches_rfc7636_appendix_b(self) -> None:
        # Arrange - octets from RFC 7636 Appendix B
        entropy = bytes(
            [
                116, 24, 223, 180, 151, 153, 224, 37, 79, 250, 96, 125, 216, 173,
                187, 186, 22, 212, 37, 77, 105, 214, 191, 240, 91, 88, 5, 88, 83,
                132, 141, 121,
            ]
        )

        # Act
        verifier = derive_code_verifier(entropy)
        challenge = derive_code_challenge(verifier)

        # Assert
        assert code_verifier_to_string(verifier) == (
            "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        )
        assert code_challenge_to_string(challenge) == (
            "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"
        )
        assert challenge.method == "S256"

    def test_challenge_is_sha256_of_verifier_string(self) -> None:
        verifier = derive_code_verifier(b"\x42" * 64)

        challenge = code_challenge_to_string(derive_code_challenge(verifier))

        digest = hashlib.sha256(str(verifier).encode("ascii")).digest()
        assert challenge == base64.urlsafe_b64encode(digest).decode().rstrip("=")

    def test_deterministic(self) -> None:
        verifier = derive_code_verifier(b"\x07" * 40)

        first = derive_code_challenge(verifier)
        second = derive_code_challenge(verifier)

        assert str(first) == str(second)

    def test_different_verifiers_yield_different_challenges(self) -> None:
        # Arrange
        verifier1 = generate_code_verifier()
        verifier2 = generate_code_verifier()

        # Act & Assert
        assert str(verifier1) != str(verifier2)
        assert str(derive_code_challenge(verifier1)) != str(
            derive_code_challenge(verifier2)
        )

    def test_challenge_cannot_be_built_from_raw_bytes(self) -> None:
        with pytest.raises(TypeError):
            CodeChallenge(b"\x00" * 32)

    def test_direct_construction_matches_derivation(self) -> None:
        verifier = derive_code_verifier(b"\x09" * 32)

        assert CodeChallenge(verifier) == derive_code_challenge(verifier)
