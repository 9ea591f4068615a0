"""Short, stable, non-cryptographic hash strings."""

from __future__ import annotations

HASH_LEN = 16
_DIGITS = "0123456789abcdef"
_MASK = (1 << 64) - 1


def generate_hash(data: str | bytes) -> str:
    """Return a 16-character hex digest of the data, lowest digit first."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    value = 0
    for byte in raw:
        signed = byte - 256 if byte > 127 else byte
        value = (signed + (value << 5) - value) & _MASK
    digits = []
    for _ in range(HASH_LEN):
        value, rem = divmod(value, len(_DIGITS))
        digits.append(_DIGITS[rem])
    return "".join(digits)