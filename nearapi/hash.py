"""SHA-256 crypto hashes and base58 encoding."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: position for position, char in enumerate(_ALPHABET)}

DIGEST_SIZE = 32


def b58encode(data: bytes) -> str:
    """Encode bytes using the Bitcoin base58 alphabet."""
    zeros = len(data) - len(data.lstrip(b"\0"))
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode a base58 string; raises ValueError on bad input."""
    if not text:
        raise ValueError("zero length string")
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * zeros + body


@dataclass(frozen=True)
class CryptoHash:
    """A SHA-256 digest."""

    digest: bytes = bytes(DIGEST_SIZE)

    def __post_init__(self) -> None:
        if len(self.digest) != DIGEST_SIZE:
            raise ValueError(f"sha256 digest len {len(self.digest)} != {DIGEST_SIZE}")

    def __bytes__(self) -> bytes:
        return self.digest

    def __str__(self) -> str:
        return b58encode(self.digest)

    @classmethod
    def of(cls, data: bytes) -> "CryptoHash":
        """Hash the given data."""
        return cls(hashlib.sha256(data).digest())

    @classmethod
    def from_base58(cls, text: str) -> "CryptoHash":
        data = b58decode(text)
        if len(data) != DIGEST_SIZE:
            raise ValueError(f"invalid base58 data size {len(data)}")
        return cls(data)

    @classmethod
    def from_json(cls, value: object) -> "CryptoHash":
        if not isinstance(value, str):
            raise TypeError(f"crypto hash must be a JSON string, got {type(value).__name__}")
        return cls.from_base58(value)

    def to_json(self) -> str:
        return str(self)