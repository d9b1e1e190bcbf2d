"""Credential generation for generated services.

Both generators read the operating system's CSPRNG through :mod:`secrets`.
A failure to read randomness is fatal: it surfaces as
:class:`~stackgen.errors.RandomSourceError` and is never replaced by a weaker
source.
"""

from __future__ import annotations

import secrets
import string

from stackgen.errors import RandomSourceError

DEFAULT_PASSWORD_LENGTH = 16

STRONG_UPPER = string.ascii_uppercase
STRONG_LOWER = string.ascii_lowercase
STRONG_DIGITS = string.digits
STRONG_SYMBOLS = "!@#$%^&*"

# 70 characters; SQL Server accepts every one of them in an SA password.
STRONG_ALPHABET = STRONG_LOWER + STRONG_UPPER + STRONG_DIGITS + STRONG_SYMBOLS


def _random_bytes(count: int) -> bytes:
    try:
        return secrets.token_bytes(count)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceError(f"could not read {count} random bytes: {exc}") from exc


def generate_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    """Return a lowercase hex password of *length* characters.

    ``length // 2`` random bytes are drawn, so a 16-character password
    carries 64 bits of entropy.  *length* must be a positive even number.
    """
    if length < 2 or length % 2:
        raise ValueError(f"password length must be a positive even number, got {length}")
    return _random_bytes(length // 2).hex()


def generate_strong_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    """Return a password that satisfies SQL Server's complexity policy.

    Positions 0-3 hold one uppercase letter, one lowercase letter, one digit
    and one symbol, in that order.  The remaining positions are chosen from
    :data:`STRONG_ALPHABET` by byte modulo, which is slightly biased but
    acceptable for local-only credentials.
    """
    if length < 4:
        raise ValueError(f"strong passwords need at least 4 characters, got {length}")

    raw = _random_bytes(length)
    chars = [
        STRONG_UPPER[raw[0] % len(STRONG_UPPER)],
        STRONG_LOWER[raw[1] % len(STRONG_LOWER)],
        STRONG_DIGITS[raw[2] % len(STRONG_DIGITS)],
        STRONG_SYMBOLS[raw[3] % len(STRONG_SYMBOLS)],
    ]
    chars.extend(STRONG_ALPHABET[b % len(STRONG_ALPHABET)] for b in raw[4:])
    return "".join(chars)
