import base64
import dataclasses

import pytest

from nearapi.action import Transfer
from nearapi.hash import CryptoHash
from nearapi.key import KeyPair
from nearapi.transaction import (
    SignedTransaction,
    Transaction,
    sign_and_serialize_transaction,
)
from nearapi.types import near_to_yocto


@pytest.fixture
def key_pair():
    return KeyPair.generate(random_bytes=lambda n: bytes(range(n)))


@pytest.fixture
def transaction(key_pair):
    return Transaction(
        signer_id="alice.testnet",
        receiver_id="bob.testnet",
        actions=[Transfer(near_to_yocto(1))],
        public_key=key_pair.public_key.to_public_key(),
        nonce=3,
        block_hash=CryptoHash.of(b"block"),
    )


def test_serialize_starts_with_signer(transaction):
    data = transaction.serialize()
    size = int.from_bytes(data[:4], "little")
    assert data[4 : 4 + size] == b"alice.testnet"
    assert data[4 + size : 4 + size + 33] == bytes(transaction.public_key)


def test_empty_actions_end_with_block_hash_and_count():
    txn = Transaction("a", "b", block_hash=CryptoHash.of(b"x"))
    data = txn.serialize()
    assert data[-4:] == bytes(4)
    assert data[-36:-4] == bytes(CryptoHash.of(b"x"))


def test_hash_is_sha256_of_serialized(transaction):
    assert transaction.hash() == CryptoHash.of(transaction.serialize())


def test_hash_and_sign(transaction, key_pair):
    digest, serialized, signature = transaction.hash_and_sign(key_pair)
    assert serialized == transaction.serialize()
    assert digest == transaction.hash()
    assert key_pair.public_key.to_public_key().verify(bytes(digest), signature)


def test_signed_transaction_verifies(transaction, key_pair):
    signed = SignedTransaction.create(key_pair, transaction)
    assert signed.verify(key_pair.public_key.to_public_key())
    assert signed.size == len(transaction.serialize())
    assert signed.hash == transaction.hash()


def test_tampered_transaction_fails_verification(transaction, key_pair):
    signed = SignedTransaction.create(key_pair, transaction)
    tampered = dataclasses.replace(signed, transaction=dataclasses.replace(transaction, nonce=4))
    assert tampered.verify(key_pair.public_key.to_public_key()) is False


def test_serialize_appends_signature(transaction, key_pair):
    signed = SignedTransaction.create(key_pair, transaction)
    blob = base64.b64decode(signed.serialize())
    assert blob == transaction.serialize() + bytes(signed.signature)


def test_sign_and_serialize_matches_signed_transaction(transaction, key_pair):
    expected = SignedTransaction.create(key_pair, transaction).serialize()
    assert sign_and_serialize_transaction(key_pair, transaction) == expected