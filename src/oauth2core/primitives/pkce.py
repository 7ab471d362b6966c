"""PKCE (Proof Key for Code Exchange) primitives.

Implements RFC 7636 verifier and S256 challenge derivation. Entropy is
supplied by the caller; see ``oauth2core.services.security`` for a
``secrets``-backed generator.
"""

from __future__ import annotations

from oauth2core.models.security import CodeChallenge, CodeVerifier


def derive_code_verifier(entropy: bytes) -> CodeVerifier:
    """Wrap caller-supplied entropy in a ``CodeVerifier``.

    RFC 7636 Section 4.1 recommends 32 octets from a cryptographic source.
    Anything between 32 and 90 bytes is accepted, which keeps the encoded
    verifier within the 43-128 character range.

    Raises:
        InvalidEntropyError: If ``entropy`` is shorter than 32 or longer
            than 90 bytes.
    """
    return CodeVerifier(bytes(entropy))


def code_verifier_to_string(verifier: CodeVerifier) -> str:
    return str(verifier)


def derive_code_challenge(verifier: CodeVerifier) -> CodeChallenge:
    """Derive the S256 code challenge for ``verifier``.

    Deterministic: the authorization server recomputes the same value from
    the verifier sent at token exchange time.
    """
    return CodeChallenge.from_verifier(verifier)


def code_challenge_to_string(challenge: CodeChallenge) -> str:
    return str(challenge)
