"""One-time passcode primitives.

Codes are drawn from an injected random source so tests can make them
deterministic without patching module state. Only the SHA-256 hex digest of a
code is ever persisted.
"""

import hashlib
import secrets
from typing import Protocol


class RandomSource(Protocol):
    """Source of random characters for OTP generation."""

    def choice(self, alphabet: str) -> str:
        """Pick one character from the alphabet."""
        ...


class SecretsRandomSource:
    """Cryptographically secure random source backed by ``secrets``."""

    def choice(self, alphabet: str) -> str:
        return secrets.choice(alphabet)


def generate_code(random_source: RandomSource, length: int, alphabet: str) -> str:
    """Generate a fixed-length code.

    Args:
        random_source: Source of random characters
        length: Number of characters in the code
        alphabet: Characters to draw from

    Returns:
        Plaintext code

    Raises:
        ValueError: If length or alphabet is empty
    """
    if length < 1:
        raise ValueError("OTP length must be positive")
    if not alphabet:
        raise ValueError("OTP alphabet must not be empty")
    return "".join(random_source.choice(alphabet) for _ in range(length))


def hash_code(code: str) -> str:
    """Hash a plaintext code (lowercase hex SHA-256)."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()
