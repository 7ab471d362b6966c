"""Security utilities for OAuth 2.0 flows.

Provides cryptographically secure entropy for PKCE verifiers and state
parameters, and constant-time state validation.
"""

from __future__ import annotations

import secrets
import string

from oauth2core.models.errors import StateValidationError
from oauth2core.models.security import CodeVerifier
from oauth2core.primitives.pkce import derive_code_verifier


def generate_code_verifier(num_bytes: int = 32) -> CodeVerifier:
    """Generate a code verifier from ``secrets`` entropy.

    Args:
        num_bytes: Entropy size; RFC 7636 recommends 32

    Raises:
        InvalidEntropyError: If ``num_bytes`` is outside 32-90
    """
    return derive_code_verifier(secrets.token_bytes(num_bytes))


def generate_state() -> str:
    """Generate cryptographically secure state parameter.

    Returns:
        Cryptographically secure random state string (32 characters)
    """
    alphabet = string.ascii_letters + string.digits + "-._~"
    return "".join(secrets.choice(alphabet) for _ in range(32))


def validate_state(expected: str, actual: str | None) -> None:
    """Validate state parameter matches expected value.

    Raises:
        StateValidationError: If state is missing or doesn't match
    """
    if actual is None:
        raise StateValidationError("Authorization response missing state parameter")
    if not secrets.compare_digest(expected.encode(), actual.encode()):
        raise StateValidationError("State parameter mismatch - possible CSRF attack")
