"""Public keys, their base58 form and ed25519 key pairs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .hash import b58decode, b58encode
from .signature import Signature

RAW_KEY_TYPE_ED25519 = 0
RAW_KEY_TYPE_SECP256K1 = 1

ED25519_PUBLIC_KEY_SIZE = 32
ED25519_PRIVATE_KEY_SIZE = 64
ED25519_SEED_SIZE = 32
PUBLIC_KEY_SIZE = 33


class PublicKeyType(str, Enum):
    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"

    @property
    def raw(self) -> int:
        """The single-byte tag used in binary encodings."""
        return list(type(self)).index(self)


class InvalidPublicKeyError(ValueError):
    def __init__(self, message: str = "invalid public key") -> None:
        super().__init__(message)


class InvalidPrivateKeyError(ValueError):
    def __init__(self, message: str = "invalid private key") -> None:
        super().__init__(message)


class InvalidKeyTypeError(ValueError):
    def __init__(self, message: str = "invalid key type") -> None:
        super().__init__(message)


def _unsupported() -> ValueError:
    return ValueError("SECP256K1 is not supported yet")


def _key_type(key_type: "PublicKeyType | str") -> PublicKeyType:
    try:
        return PublicKeyType(key_type)
    except ValueError:
        raise InvalidKeyTypeError() from None


@dataclass(frozen=True)
class PublicKey:
    """A type byte followed by the raw key bytes."""

    data: bytes = bytes(PUBLIC_KEY_SIZE)

    def __post_init__(self) -> None:
        if len(self.data) != PUBLIC_KEY_SIZE:
            raise InvalidPublicKeyError()

    def __bytes__(self) -> bytes:
        return self.data

    def hash(self) -> str:
        """Hex form of the key value, used as an implicit account id."""
        return self.data[1:].hex()

    def type_byte(self) -> int:
        return self.data[0]

    def value(self) -> bytes:
        return self.data[1:]

    def to_json(self) -> str:
        return b58encode(self.data)

    @classmethod
    def from_json(cls, value: object) -> "PublicKey":
        if not isinstance(value, str):
            raise TypeError(f"public key must be a JSON string, got {type(value).__name__}")
        decoded = b58decode(value)
        return cls((decoded + bytes(PUBLIC_KEY_SIZE))[:PUBLIC_KEY_SIZE])

    def verify(self, data: bytes, signature: Signature) -> bool:
        """Check a signature over data; raises if the key cannot check it."""
        key_type = self.type_byte()
        if signature.type_byte() != key_type:
            raise ValueError(
                f"cannot verify signature type {signature.type_byte()} with key type {key_type}"
            )
        if key_type == RAW_KEY_TYPE_ED25519:
            verifier = Ed25519PublicKey.from_public_bytes(self.value())
            try:
                verifier.verify(signature.value(), data)
            except InvalidSignature:
                return False
            return True
        if key_type == RAW_KEY_TYPE_SECP256K1:
            raise _unsupported()
        return False

    def to_base58(self) -> "Base58PublicKey":
        types = list(PublicKeyType)
        if self.type_byte() >= len(types):
            raise InvalidKeyTypeError()
        return Base58PublicKey(types[self.type_byte()], b58encode(self.value()))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        if not data:
            raise InvalidPublicKeyError()
        tag = data[0]
        if tag == RAW_KEY_TYPE_ED25519:
            if len(data) - 1 != ED25519_PUBLIC_KEY_SIZE:
                raise InvalidPublicKeyError()
            return cls(bytes(data))
        if tag == RAW_KEY_TYPE_SECP256K1:
            raise _unsupported()
        raise InvalidKeyTypeError()

    @classmethod
    def wrap_raw(cls, key_type: "PublicKeyType | str", key: bytes) -> "PublicKey":
        kind = _key_type(key_type)
        if kind is PublicKeyType.ED25519:
            if len(key) != ED25519_PUBLIC_KEY_SIZE:
                raise InvalidPublicKeyError()
            return cls(bytes([RAW_KEY_TYPE_ED25519]) + bytes(key))
        raise _unsupported()

    @classmethod
    def wrap_ed25519(cls, key: bytes) -> "PublicKey":
        return cls.wrap_raw(PublicKeyType.ED25519, key)


PeerID = PublicKey


@dataclass(frozen=True)
class Base58PublicKey:
    """A public key written as '<type>:<base58>'."""

    type: PublicKeyType
    value: str

    def __str__(self) -> str:
        return f"{self.type.value}:{self.value}"

    @classmethod
    def parse(cls, raw: str) -> "Base58PublicKey":
        type_name, sep, encoded = raw.partition(":")
        if not sep:
            raise InvalidPublicKeyError()
        key_type = _key_type(type_name)
        try:
            decoded = b58decode(encoded)
        except ValueError as exc:
            raise ValueError(f"failed to decode public key: {exc}") from exc
        PublicKey.wrap_raw(key_type, decoded)
        return cls(key_type, encoded)

    def to_public_key(self) -> PublicKey:
        return PublicKey.wrap_raw(self.type, b58decode(self.value))

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: object) -> "Base58PublicKey":
        if not isinstance(value, str):
            raise TypeError(f"public key must be a JSON string, got {type(value).__name__}")
        return cls.parse(value)


@dataclass(frozen=True)
class KeyPair:
    """An ed25519 key pair; the private key holds seed and public key."""

    type: PublicKeyType
    public_key: Base58PublicKey
    private_key: bytes = field(repr=False)

    @classmethod
    def generate(
        cls,
        key_type: "PublicKeyType | str" = PublicKeyType.ED25519,
        random_bytes: Callable[[int], bytes] = os.urandom,
    ) -> "KeyPair":
        kind = _key_type(key_type)
        if kind is not PublicKeyType.ED25519:
            raise _unsupported()
        seed = random_bytes(ED25519_SEED_SIZE)
        if len(seed) != ED25519_SEED_SIZE:
            raise ValueError("not enough random bytes for key generation")
        signer = Ed25519PrivateKey.from_private_bytes(seed)
        public = signer.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        wrapped = PublicKey.wrap_raw(kind, public)
        return cls(kind, wrapped.to_base58(), seed + public)

    @classmethod
    def parse(cls, raw: str) -> "KeyPair":
        type_name, sep, encoded = raw.partition(":")
        if not sep:
            raise InvalidPrivateKeyError()
        kind = _key_type(type_name)
        if kind is PublicKeyType.SECP256K1:
            raise _unsupported()
        try:
            decoded = b58decode(encoded)
        except ValueError as exc:
            raise ValueError(f"failed to decode private key: {exc}") from exc
        if len(decoded) != ED25519_PRIVATE_KEY_SIZE:
            raise InvalidPrivateKeyError()
        public = PublicKey.wrap_raw(kind, decoded[ED25519_SEED_SIZE:])
        return cls(kind, public.to_base58(), decoded)

    @classmethod
    def from_json(cls, value: object) -> "KeyPair":
        if not isinstance(value, str):
            raise TypeError(f"private key must be a JSON string, got {type(value).__name__}")
        return cls.parse(value)

    def sign(self, data: bytes) -> Signature:
        if self.type is not PublicKeyType.ED25519:
            raise _unsupported()
        signer = Ed25519PrivateKey.from_private_bytes(self.private_key[:ED25519_SEED_SIZE])
        return Signature.ed25519(signer.sign(data))

    def private_encoded(self) -> str:
        return f"{self.type.value}:{b58encode(self.private_key)}"