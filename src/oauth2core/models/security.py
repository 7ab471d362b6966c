"""PKCE values for OAuth 2.0 public clients (RFC 7636).

Both values are opaque: they only expose their base64url string form, and
the secret bytes are kept out of ``repr``.
"""

from __future__ import annotations

import hashlib
from dataclasses import InitVar, dataclass, field

from oauth2core.models.errors import InvalidEntropyError
from oauth2core.primitives.codec import base64url_encode

MIN_ENTROPY_BYTES = 32
MAX_ENTROPY_BYTES = 90
CODE_CHALLENGE_METHOD = "S256"


@dataclass(frozen=True)
class CodeVerifier:
    """High-entropy secret generated by the client for one flow.

    The entropy length is checked once here; everything derived from a
    verifier relies on it.
    """

    entropy: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not (MIN_ENTROPY_BYTES <= len(self.entropy) <= MAX_ENTROPY_BYTES):
            raise InvalidEntropyError(
                f"Code verifier entropy must be {MIN_ENTROPY_BYTES}-"
                f"{MAX_ENTROPY_BYTES} bytes, got {len(self.entropy)}"
            )

    def __str__(self) -> str:
        return base64url_encode(self.entropy)


@dataclass(frozen=True)
class CodeChallenge:
    """S256 challenge derived from a ``CodeVerifier``.

    BASE64URL-ENCODE(SHA256(ASCII(code_verifier))). The only input is a
    verifier, so a challenge cannot be built from arbitrary bytes, and there
    is no way back from a challenge to its verifier.
    """

    verifier: InitVar[CodeVerifier]
    digest: bytes = field(init=False, repr=False)

    def __post_init__(self, verifier: CodeVerifier) -> None:
        if not isinstance(verifier, CodeVerifier):
            raise TypeError(
                f"Code challenge must be derived from a CodeVerifier, "
                f"got {type(verifier).__name__}"
            )
        digest = hashlib.sha256(str(verifier).encode("ascii")).digest()
        object.__setattr__(self, "digest", digest)

    @classmethod
    def from_verifier(cls, verifier: CodeVerifier) -> CodeChallenge:
        return cls(verifier)

    @property
    def method(self) -> str:
        return CODE_CHALLENGE_METHOD

    def __str__(self) -> str:
        return base64url_encode(self.digest)
