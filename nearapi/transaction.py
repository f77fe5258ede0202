"""Transactions, their Borsh form and signing."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field

from .action import Action
from .borsh import BorshWriter
from .hash import CryptoHash
from .key import KeyPair, PublicKey
from .signature import Signature
from .types import AccountID, Nonce


@dataclass
class Transaction:
    signer_id: AccountID
    receiver_id: AccountID
    actions: list[Action] = field(default_factory=list)
    public_key: PublicKey = field(default_factory=PublicKey)
    nonce: Nonce = 0
    block_hash: CryptoHash = field(default_factory=CryptoHash)

    def serialize(self) -> bytes:
        """The Borsh encoding of the transaction."""
        writer = (
            BorshWriter()
            .string(self.signer_id)
            .fixed(bytes(self.public_key))
            .u64(self.nonce)
            .string(self.receiver_id)
            .fixed(bytes(self.block_hash))
            .u32(len(self.actions))
        )
        for action in self.actions:
            action.write_borsh(writer)
        return writer.getvalue()

    def hash(self) -> CryptoHash:
        return CryptoHash.of(self.serialize())

    def hash_and_sign(self, key_pair: KeyPair) -> tuple[CryptoHash, bytes, Signature]:
        """Return the hash, the serialized bytes and a signature over the hash."""
        serialized = self.serialize()
        digest = CryptoHash.of(serialized)
        return digest, serialized, key_pair.sign(bytes(digest))


@dataclass(frozen=True)
class SignedTransaction:
    transaction: Transaction
    signature: Signature
    serialized_transaction: bytes = b""
    hash: CryptoHash = field(default_factory=CryptoHash)

    @property
    def size(self) -> int:
        return len(self.serialized_transaction)

    @classmethod
    def create(cls, key_pair: KeyPair, transaction: Transaction) -> "SignedTransaction":
        digest, serialized, signature = transaction.hash_and_sign(key_pair)
        return cls(transaction, signature, serialized, digest)

    def verify(self, public_key: PublicKey) -> bool:
        return public_key.verify(bytes(self.transaction.hash()), self.signature)

    def serialize(self) -> str:
        """Base64 of the Borsh-encoded transaction followed by its signature."""
        blob = self.transaction.serialize() + bytes(self.signature)
        return base64.b64encode(blob).decode("ascii")


def sign_and_serialize_transaction(key_pair: KeyPair, transaction: Transaction) -> str:
    return SignedTransaction.create(key_pair, transaction).serialize()