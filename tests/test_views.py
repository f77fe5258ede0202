import pytest

from nearapi.action import Transfer
from nearapi.hash import CryptoHash, b58encode
from nearapi.key import Base58PublicKey, KeyPair, PublicKeyType
from nearapi.signature import Base58Signature
from nearapi.types import Balance
from nearapi.views import (
    AccessKey,
    AccessKeyList,
    AccessKeyPermission,
    AccessKeyView,
    AccountView,
    BlockHeaderView,
    BlockView,
    CallResult,
    ChunkView,
    ExecutionOutcomeView,
    FinalExecutionOutcomeWithReceiptView,
    FunctionCallPermission,
    GasPrice,
    QueryResponse,
    TransactionStatus,
    ViewStateResult,
)

PUBLIC_KEY_TEXT = "ed25519:DcA2MzgpJbrUATQLLceocVckhhAqrkingax4oJ9kZ847"
HASH_A = str(CryptoHash.of(b"a"))
HASH_B = str(CryptoHash.of(b"b"))


def _signature_text() -> str:
    pair = KeyPair.generate(PublicKeyType.ED25519, lambda n: bytes(n))
    return f"ed25519:{b58encode(pair.sign(b'data').value())}"


SIG_TEXT = _signature_text()


def test_query_response():
    resp = QueryResponse.from_json({"block_height": 42, "block_hash": HASH_A})
    assert resp.block_height == 42
    assert resp.block_hash == CryptoHash.from_base58(HASH_A)


def test_full_access_key():
    access = AccessKey.from_json({"nonce": 7, "permission": "FullAccess"})
    assert access.nonce == 7
    assert access.permission.full_access is True


def test_function_call_permission():
    perm = AccessKeyPermission.from_json(
        {
            "FunctionCall": {
                "allowance": "250000000000000000000000",
                "receiver_id": "app.testnet",
                "method_names": ["get", "set"],
            }
        }
    )
    assert perm.full_access is False
    assert perm.function_call.allowance == Balance(250000000000000000000000)
    assert perm.function_call.receiver_id == "app.testnet"
    assert perm.function_call.method_names == ["get", "set"]


def test_function_call_permission_without_allowance():
    perm = FunctionCallPermission.from_json(
        {"allowance": None, "receiver_id": "app.testnet", "method_names": []}
    )
    assert perm.allowance is None
    assert perm.method_names == []


def test_invalid_permission_string():
    with pytest.raises(ValueError):
        AccessKeyPermission.from_json("PartialAccess")


def test_invalid_permission_type():
    with pytest.raises(TypeError):
        AccessKeyPermission.from_json(5)


def test_access_key_view_has_query_fields():
    view = AccessKeyView.from_json(
        {"nonce": 3, "permission": "FullAccess", "block_height": 10, "block_hash": HASH_B}
    )
    assert view.nonce == 3
    assert view.permission.full_access
    assert view.block_height == 10
    assert view.block_hash == CryptoHash.from_base58(HASH_B)


def test_access_key_list():
    access = {"nonce": 1, "permission": "FullAccess"}
    entries = [{"public_key": PUBLIC_KEY_TEXT, "access_key": access}]
    listing = AccessKeyList.from_json({"keys": entries})
    assert len(listing.keys) == 1
    assert str(listing.keys[0].public_key) == PUBLIC_KEY_TEXT
    assert listing.keys[0].access_key.nonce == 1


def test_account_view():
    view = AccountView.from_json(
        {
            "amount": "1000",
            "locked": "5",
            "code_hash": HASH_A,
            "storage_usage": 182,
            "storage_paid_at": 0,
            "block_height": 99,
            "block_hash": HASH_B,
        }
    )
    assert view.amount == Balance(1000)
    assert view.locked == Balance(5)
    assert view.code_hash == CryptoHash.from_base58(HASH_A)
    assert view.storage_usage == 182
    assert view.block_height == 99


def test_block_view():
    header = {
        "height": 42,
        "hash": HASH_A,
        "prev_hash": HASH_B,
        "timestamp_nanosec": "1621000000000000000",
        "validator_proposals": [
            {"account_id": "node.testnet", "public_key": PUBLIC_KEY_TEXT, "stake": "100"}
        ],
        "chunk_mask": [True, False],
        "gas_price": "100000000",
        "challenges_result": [{"account_id": "bad.testnet", "is_double_sign": True}],
        "approvals": [SIG_TEXT, None],
        "signature": SIG_TEXT,
        "latest_protocol_version": 45,
    }
    block = BlockView.from_json(
        {"author": "node.testnet", "header": header, "chunks": [{"chunk_hash": HASH_B, "shard_id": 0}]}
    )
    assert block.author == "node.testnet"
    assert block.header.height == 42
    assert block.header.hash == CryptoHash.from_base58(HASH_A)
    assert block.header.timestamp_nanosec == Balance(1621000000000000000)
    assert block.header.chunk_mask == [True, False]
    assert block.header.approvals[0] == Base58Signature.parse(SIG_TEXT)
    assert block.header.approvals[1] is None
    assert block.header.validator_proposals[0].public_key == Base58PublicKey.parse(
        PUBLIC_KEY_TEXT
    ).to_public_key()
    assert block.header.challenges_result[0].is_double_sign is True
    assert block.chunks[0].chunk_hash == CryptoHash.from_base58(HASH_B)


def test_missing_fields_take_zero_values():
    header = BlockHeaderView.from_json({})
    assert header.height == 0
    assert header.hash == CryptoHash()
    assert header.signature is None
    assert header.approvals == []


def test_bad_hash_length():
    with pytest.raises(ValueError):
        BlockHeaderView.from_json({"hash": b58encode(b"short")})


def test_negative_integer_rejected():
    with pytest.raises(ValueError):
        BlockHeaderView.from_json({"height": -1})


def test_string_integer_rejected():
    with pytest.raises(TypeError):
        BlockHeaderView.from_json({"height": "1"})


def test_chunk_view_with_transactions():
    chunk = ChunkView.from_json(
        {
            "author": "node.testnet",
            "header": {"chunk_hash": HASH_A, "gas_used": 10},
            "transactions": [
                {
                    "signer_id": "alice.testnet",
                    "public_key": PUBLIC_KEY_TEXT,
                    "nonce": 5,
                    "receiver_id": "bob.testnet",
                    "actions": [{"Transfer": {"deposit": "1000"}}],
                    "signature": SIG_TEXT,
                    "hash": HASH_B,
                }
            ],
            "receipts": [{"predecessor_id": "alice.testnet", "receiver_id": "bob.testnet", "receipt_id": HASH_A}],
        }
    )
    txn = chunk.transactions[0]
    assert txn.actions == [Transfer(Balance(1000))]
    assert txn.nonce == 5
    assert str(txn.public_key) == PUBLIC_KEY_TEXT
    assert txn.hash == CryptoHash.from_base58(HASH_B)
    assert chunk.header.gas_used == 10
    assert chunk.receipts[0].receipt_id == CryptoHash.from_base58(HASH_A)


def test_call_result_from_byte_array():
    result = CallResult.from_json({"result": [123, 125], "logs": ["hello"], "block_height": 1})
    assert result.result == bytes([123, 125])
    assert result.logs == ["hello"]
    assert result.block_height == 1


def test_call_result_from_base64():
    result = CallResult.from_json({"result": "e30="})
    assert result.result == b"{}"


def test_view_state_result():
    result = ViewStateResult.from_json(
        {"values": [{"key": "a2V5", "value": "dmFsdWU=", "proof": []}], "proof": ["cA=="], "block_height": 3}
    )
    assert result.values[0].key == "a2V5"
    assert result.values[0].value == "dmFsdWU="
    assert result.proof == ["cA=="]
    assert result.block_height == 3


def test_gas_price():
    assert GasPrice.from_json({"gas_price": "100000000"}).gas_price == Balance(100000000)


def test_transaction_status():
    status = TransactionStatus.from_json({"SuccessValue": "e30="})
    assert status.success_value == "e30="
    assert status.success_receipt_id == ""


def test_transaction_status_must_be_object():
    with pytest.raises(TypeError):
        TransactionStatus.from_json("Unknown")


def test_final_execution_outcome_with_receipts():
    outcome = FinalExecutionOutcomeWithReceiptView.from_json(
        {
            "status": {"SuccessValue": ""},
            "transaction": {"signer_id": "alice.testnet", "receiver_id": "bob.testnet", "hash": HASH_A},
            "transaction_outcome": {"id": HASH_A, "block_hash": HASH_B, "proof": [{"hash": HASH_B, "direction": "Right"}]},
            "receipts_outcome": [
                {"id": HASH_B, "outcome": {"logs": ["line"], "executor_id": "bob.testnet", "gas_burnt": 7, "receipt_ids": [HASH_A]}}
            ],
            "receipts": [{"predecessor_id": "alice.testnet", "receiver_id": "bob.testnet"}],
        }
    )
    assert outcome.transaction.hash == CryptoHash.from_base58(HASH_A)
    assert outcome.transaction_outcome.proof[0].direction == "Right"
    assert outcome.receipts_outcome[0].outcome.logs == ["line"]
    assert outcome.receipts_outcome[0].outcome.receipt_ids == [CryptoHash.from_base58(HASH_A)]
    assert outcome.receipts[0].predecessor_id == "alice.testnet"


def test_execution_outcome_rejects_non_object():
    with pytest.raises(TypeError):
        ExecutionOutcomeView.from_json([1, 2])