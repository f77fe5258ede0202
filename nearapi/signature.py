"""Signatures and their base58 textual form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .hash import b58decode

ED25519_SIGNATURE_SIZE = 64
RAW_SIGNATURE_TYPE_ED25519 = 0
RAW_SIGNATURE_TYPE_SECP256K1 = 1


class SignatureType(str, Enum):
    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"

    @property
    def raw(self) -> int:
        """The single-byte tag used in binary encodings."""
        return list(type(self)).index(self)


class InvalidSignatureError(ValueError):
    def __init__(self, message: str = "invalid signature") -> None:
        super().__init__(message)


class InvalidSignatureTypeError(ValueError):
    def __init__(self, message: str = "invalid signature type") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Signature:
    """A type byte followed by a 64-byte signature."""

    data: bytes = bytes(1 + ED25519_SIGNATURE_SIZE)

    def __post_init__(self) -> None:
        if len(self.data) != 1 + ED25519_SIGNATURE_SIZE:
            raise ValueError(f"signature must be {1 + ED25519_SIGNATURE_SIZE} bytes")

    def __bytes__(self) -> bytes:
        return self.data

    @classmethod
    def ed25519(cls, data: bytes) -> "Signature":
        if len(data) < ED25519_SIGNATURE_SIZE:
            raise ValueError(f"ed25519 signature needs {ED25519_SIGNATURE_SIZE} bytes")
        return cls(bytes([RAW_SIGNATURE_TYPE_ED25519]) + bytes(data[:ED25519_SIGNATURE_SIZE]))

    def type_byte(self) -> int:
        return self.data[0]

    def value(self) -> bytes:
        return self.data[1:]


@dataclass(frozen=True)
class Base58Signature:
    """A signature written as '<type>:<base58>'."""

    type: SignatureType
    value: str

    def __str__(self) -> str:
        return f"{self.type.value}:{self.value}"

    @classmethod
    def parse(cls, raw: str) -> "Base58Signature":
        type_name, sep, encoded = raw.partition(":")
        if not sep:
            raise InvalidSignatureError()
        try:
            sig_type = SignatureType(type_name)
        except ValueError:
            raise InvalidSignatureTypeError() from None
        try:
            b58decode(encoded)
        except ValueError as exc:
            raise ValueError(f"failed to decode signature: {exc}") from exc
        return cls(sig_type, encoded)

    @classmethod
    def from_json(cls, value: object) -> "Base58Signature":
        if not isinstance(value, str):
            raise TypeError(f"signature must be a JSON string, got {type(value).__name__}")
        return cls.parse(value)

    def to_json(self) -> str:
        return str(self)