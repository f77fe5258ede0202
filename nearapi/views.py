"""Typed views of the JSON objects returned by the RPC methods."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from .action import Action
from .hash import CryptoHash
from .key import Base58PublicKey, PublicKey
from .signature import Base58Signature
from .types import ZERO_NEAR, AccountID, Balance, BlockHeight, Gas, Nonce, ShardID, StorageUsage

T = TypeVar("T")


def _object(data: object, name: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"{name} must be a JSON object, got {type(data).__name__}")
    return data


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{key}' must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"'{key}' must not be negative, got {value}")
    return value


def _as_str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    return value


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else _as_str(value)


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else _as_str(value)


def _bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a boolean, got {type(value).__name__}")
    return value


def _hash(data: dict[str, Any], key: str) -> CryptoHash:
    value = data.get(key)
    return CryptoHash() if value is None else CryptoHash.from_json(value)


def _balance(data: dict[str, Any], key: str) -> Balance:
    value = data.get(key)
    return ZERO_NEAR if value is None else Balance.from_json(value)


def _list(data: dict[str, Any], key: str, parse: Callable[[Any], T]) -> list[T]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a JSON array, got {type(value).__name__}")
    return [parse(item) for item in value]


def _public_key(value: object) -> PublicKey:
    if value is None:
        return PublicKey()
    if isinstance(value, str) and ":" in value:
        return Base58PublicKey.parse(value).to_public_key()
    return PublicKey.from_json(value)


def _base58_signature(value: object) -> Optional[Base58Signature]:
    return None if value is None else Base58Signature.from_json(value)


def _bytes(data: dict[str, Any], key: str) -> bytes:
    value = data.get(key)
    if value is None:
        return b""
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    if isinstance(value, list):
        return bytes(value)
    raise TypeError(f"'{key}' must be base64 text or an array of bytes")


def _query_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {"block_height": _int(data, "block_height"), "block_hash": _hash(data, "block_hash")}


@dataclass
class QueryResponse:
    """The block a query was answered at."""

    block_height: BlockHeight = 0
    block_hash: CryptoHash = field(default_factory=CryptoHash)

    @classmethod
    def from_json(cls, data: object) -> "QueryResponse":
        return cls(**_query_fields(_object(data, "query response")))


@dataclass
class FunctionCallPermission:
    """Which contract and methods a function call key may call."""

    allowance: Optional[Balance] = None
    receiver_id: AccountID = ""
    method_names: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "FunctionCallPermission":
        data = _object(data, "function call permission")
        allowance = data.get("allowance")
        return cls(
            allowance=None if allowance is None else Balance.from_json(allowance),
            receiver_id=_str(data, "receiver_id"),
            method_names=_list(data, "method_names", _as_str),
        )


@dataclass
class AccessKeyPermission:
    """Either full access or a function call permission."""

    full_access: bool = False
    function_call: FunctionCallPermission = field(default_factory=FunctionCallPermission)

    @classmethod
    def from_json(cls, data: object) -> "AccessKeyPermission":
        if isinstance(data, str):
            if data == "FullAccess":
                return cls(full_access=True)
            raise ValueError(f"'{data}' is neither object or 'FullAccess'")
        data = _object(data, "access key permission")
        function_call = data.get("FunctionCall")
        if function_call is None:
            return cls()
        return cls(function_call=FunctionCallPermission.from_json(function_call))


@dataclass
class AccessKey:
    nonce: Nonce = 0
    permission: AccessKeyPermission = field(default_factory=AccessKeyPermission)

    @classmethod
    def from_json(cls, data: object) -> "AccessKey":
        data = _object(data, "access key")
        return cls(
            nonce=_int(data, "nonce"),
            permission=AccessKeyPermission.from_json(data.get("permission")),
        )


@dataclass
class AccessKeyView(QueryResponse, AccessKey):
    """An access key together with the block it was read at."""

    @classmethod
    def from_json(cls, data: object) -> "AccessKeyView":
        data = _object(data, "access key view")
        return cls(**vars(AccessKey.from_json(data)), **_query_fields(data))


@dataclass
class AccessKeyViewInfo:
    public_key: Optional[Base58PublicKey] = None
    access_key: AccessKey = field(default_factory=AccessKey)

    @classmethod
    def from_json(cls, data: object) -> "AccessKeyViewInfo":
        data = _object(data, "access key info")
        public_key = data.get("public_key")
        access_key = data.get("access_key")
        return cls(
            public_key=None if public_key is None else Base58PublicKey.from_json(public_key),
            access_key=AccessKey() if access_key is None else AccessKey.from_json(access_key),
        )


@dataclass
class AccessKeyList:
    keys: list[AccessKeyViewInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "AccessKeyList":
        data = _object(data, "access key list")
        return cls(keys=_list(data, "keys", AccessKeyViewInfo.from_json))


@dataclass
class AccountView(QueryResponse):
    amount: Balance = ZERO_NEAR
    locked: Balance = ZERO_NEAR
    code_hash: CryptoHash = field(default_factory=CryptoHash)
    storage_usage: StorageUsage = 0
    storage_paid_at: BlockHeight = 0

    @classmethod
    def from_json(cls, data: object) -> "AccountView":
        data = _object(data, "account view")
        return cls(
            amount=_balance(data, "amount"),
            locked=_balance(data, "locked"),
            code_hash=_hash(data, "code_hash"),
            storage_usage=_int(data, "storage_usage"),
            storage_paid_at=_int(data, "storage_paid_at"),
            **_query_fields(data),
        )


@dataclass
class SlashedValidator:
    account_id: AccountID = ""
    is_double_sign: bool = False

    @classmethod
    def from_json(cls, data: object) -> "SlashedValidator":
        data = _object(data, "slashed validator")
        return cls(
            account_id=_str(data, "account_id"),
            is_double_sign=_bool(data, "is_double_sign"),
        )


ChallengesResult = list[SlashedValidator]


@dataclass
class ValidatorStakeView:
    account_id: AccountID = ""
    public_key: PublicKey = field(default_factory=PublicKey)
    stake: Balance = ZERO_NEAR

    @classmethod
    def from_json(cls, data: object) -> "ValidatorStakeView":
        data = _object(data, "validator stake")
        return cls(
            account_id=_str(data, "account_id"),
            public_key=_public_key(data.get("public_key")),
            stake=_balance(data, "stake"),
        )


@dataclass
class TransactionStatus:
    success_value: str = ""
    success_receipt_id: str = ""
    failure: Any = None

    @classmethod
    def from_json(cls, data: object) -> "TransactionStatus":
        data = _object(data, "transaction status")
        return cls(
            success_value=_str(data, "SuccessValue"),
            success_receipt_id=_str(data, "SuccessReceiptId"),
            failure=data.get("Failure"),
        )


@dataclass
class SignedTransactionView:
    signer_id: AccountID = ""
    public_key: Optional[Base58PublicKey] = None
    nonce: Nonce = 0
    receiver_id: AccountID = ""
    actions: list[Action] = field(default_factory=list)
    signature: Optional[Base58Signature] = None
    hash: CryptoHash = field(default_factory=CryptoHash)

    @classmethod
    def from_json(cls, data: object) -> "SignedTransactionView":
        data = _object(data, "signed transaction")
        public_key = data.get("public_key")
        return cls(
            signer_id=_str(data, "signer_id"),
            public_key=None if public_key is None else Base58PublicKey.from_json(public_key),
            nonce=_int(data, "nonce"),
            receiver_id=_str(data, "receiver_id"),
            actions=_list(data, "actions", Action.from_json),
            signature=_base58_signature(data.get("signature")),
            hash=_hash(data, "hash"),
        )


@dataclass
class ReceiptView:
    predecessor_id: AccountID = ""
    receiver_id: AccountID = ""
    receipt_id: CryptoHash = field(default_factory=CryptoHash)
    receipt: Any = None

    @classmethod
    def from_json(cls, data: object) -> "ReceiptView":
        data = _object(data, "receipt")
        return cls(
            predecessor_id=_str(data, "predecessor_id"),
            receiver_id=_str(data, "receiver_id"),
            receipt_id=_hash(data, "receipt_id"),
            receipt=data.get("receipt"),
        )


@dataclass
class ExecutionOutcomeView:
    logs: list[str] = field(default_factory=list)
    receipt_ids: list[CryptoHash] = field(default_factory=list)
    gas_burnt: Gas = 0
    tokens_burnt: Balance = ZERO_NEAR
    executor_id: AccountID = ""
    status: TransactionStatus = field(default_factory=TransactionStatus)

    @classmethod
    def from_json(cls, data: object) -> "ExecutionOutcomeView":
        data = _object(data, "execution outcome")
        status = data.get("status")
        return cls(
            logs=_list(data, "logs", _as_str),
            receipt_ids=_list(data, "receipt_ids", CryptoHash.from_json),
            gas_burnt=_int(data, "gas_burnt"),
            tokens_burnt=_balance(data, "tokens_burnt"),
            executor_id=_str(data, "executor_id"),
            status=TransactionStatus() if status is None else TransactionStatus.from_json(status),
        )


@dataclass
class MerklePathItem:
    hash: CryptoHash = field(default_factory=CryptoHash)
    direction: str = ""

    @classmethod
    def from_json(cls, data: object) -> "MerklePathItem":
        data = _object(data, "merkle path item")
        return cls(hash=_hash(data, "hash"), direction=_str(data, "direction"))


MerklePath = list[MerklePathItem]


@dataclass
class ExecutionOutcomeWithIdView:
    proof: list[MerklePathItem] = field(default_factory=list)
    block_hash: CryptoHash = field(default_factory=CryptoHash)
    id: CryptoHash = field(default_factory=CryptoHash)
    outcome: ExecutionOutcomeView = field(default_factory=ExecutionOutcomeView)

    @classmethod
    def from_json(cls, data: object) -> "ExecutionOutcomeWithIdView":
        data = _object(data, "execution outcome with id")
        outcome = data.get("outcome")
        return cls(
            proof=_list(data, "proof", MerklePathItem.from_json),
            block_hash=_hash(data, "block_hash"),
            id=_hash(data, "id"),
            outcome=ExecutionOutcomeView() if outcome is None else ExecutionOutcomeView.from_json(outcome),
        )


@dataclass
class FinalExecutionOutcomeView:
    status: TransactionStatus = field(default_factory=TransactionStatus)
    transaction: SignedTransactionView = field(default_factory=SignedTransactionView)
    transaction_outcome: ExecutionOutcomeWithIdView = field(default_factory=ExecutionOutcomeWithIdView)
    receipts_outcome: list[ExecutionOutcomeWithIdView] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "FinalExecutionOutcomeView":
        data = _object(data, "final execution outcome")
        status = data.get("status")
        transaction = data.get("transaction")
        outcome = data.get("transaction_outcome")
        return cls(
            status=TransactionStatus() if status is None else TransactionStatus.from_json(status),
            transaction=(
                SignedTransactionView()
                if transaction is None
                else SignedTransactionView.from_json(transaction)
            ),
            transaction_outcome=(
                ExecutionOutcomeWithIdView()
                if outcome is None
                else ExecutionOutcomeWithIdView.from_json(outcome)
            ),
            receipts_outcome=_list(data, "receipts_outcome", ExecutionOutcomeWithIdView.from_json),
        )


@dataclass
class FinalExecutionOutcomeWithReceiptView(FinalExecutionOutcomeView):
    receipts: list[ReceiptView] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "FinalExecutionOutcomeWithReceiptView":
        data = _object(data, "final execution outcome")
        base = FinalExecutionOutcomeView.from_json(data)
        return cls(**vars(base), receipts=_list(data, "receipts", ReceiptView.from_json))


@dataclass
class ChunkHeaderView:
    chunk_hash: CryptoHash = field(default_factory=CryptoHash)
    prev_block_hash: CryptoHash = field(default_factory=CryptoHash)
    outcome_root: CryptoHash = field(default_factory=CryptoHash)
    prev_state_root: Any = None
    encoded_merkle_root: CryptoHash = field(default_factory=CryptoHash)
    encoded_length: int = 0
    height_created: BlockHeight = 0
    height_included: BlockHeight = 0
    shard_id: ShardID = 0
    gas_used: Gas = 0
    gas_limit: Gas = 0
    rent_paid: Balance = ZERO_NEAR
    validator_reward: Balance = ZERO_NEAR
    balance_burnt: Balance = ZERO_NEAR
    outgoing_receipts_root: CryptoHash = field(default_factory=CryptoHash)
    tx_root: CryptoHash = field(default_factory=CryptoHash)
    validator_proposals: list[ValidatorStakeView] = field(default_factory=list)
    signature: Optional[Base58Signature] = None

    @classmethod
    def from_json(cls, data: object) -> "ChunkHeaderView":
        data = _object(data, "chunk header")
        return cls(
            chunk_hash=_hash(data, "chunk_hash"),
            prev_block_hash=_hash(data, "prev_block_hash"),
            outcome_root=_hash(data, "outcome_root"),
            prev_state_root=data.get("prev_state_root"),
            encoded_merkle_root=_hash(data, "encoded_merkle_root"),
            encoded_length=_int(data, "encoded_length"),
            height_created=_int(data, "height_created"),
            height_included=_int(data, "height_included"),
            shard_id=_int(data, "shard_id"),
            gas_used=_int(data, "gas_used"),
            gas_limit=_int(data, "gas_limit"),
            rent_paid=_balance(data, "rent_paid"),
            validator_reward=_balance(data, "validator_reward"),
            balance_burnt=_balance(data, "balance_burnt"),
            outgoing_receipts_root=_hash(data, "outgoing_receipts_root"),
            tx_root=_hash(data, "tx_root"),
            validator_proposals=_list(data, "validator_proposals", ValidatorStakeView.from_json),
            signature=_base58_signature(data.get("signature")),
        )


@dataclass
class ChunkView:
    author: AccountID = ""
    header: ChunkHeaderView = field(default_factory=ChunkHeaderView)
    transactions: list[SignedTransactionView] = field(default_factory=list)
    receipts: list[ReceiptView] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "ChunkView":
        data = _object(data, "chunk")
        header = data.get("header")
        return cls(
            author=_str(data, "author"),
            header=ChunkHeaderView() if header is None else ChunkHeaderView.from_json(header),
            transactions=_list(data, "transactions", SignedTransactionView.from_json),
            receipts=_list(data, "receipts", ReceiptView.from_json),
        )


@dataclass
class BlockHeaderView:
    height: BlockHeight = 0
    epoch_id: CryptoHash = field(default_factory=CryptoHash)
    next_epoch_id: CryptoHash = field(default_factory=CryptoHash)
    hash: CryptoHash = field(default_factory=CryptoHash)
    prev_hash: CryptoHash = field(default_factory=CryptoHash)
    prev_state_root: CryptoHash = field(default_factory=CryptoHash)
    chunk_receipts_root: CryptoHash = field(default_factory=CryptoHash)
    chunk_headers_root: CryptoHash = field(default_factory=CryptoHash)
    chunk_tx_root: CryptoHash = field(default_factory=CryptoHash)
    outcome_root: CryptoHash = field(default_factory=CryptoHash)
    chunks_included: int = 0
    challenges_root: CryptoHash = field(default_factory=CryptoHash)
    timestamp: int = 0
    timestamp_nanosec: Balance = ZERO_NEAR
    random_value: CryptoHash = field(default_factory=CryptoHash)
    validator_proposals: list[ValidatorStakeView] = field(default_factory=list)
    chunk_mask: list[bool] = field(default_factory=list)
    gas_price: Balance = ZERO_NEAR
    rent_paid: Balance = ZERO_NEAR
    validator_reward: Balance = ZERO_NEAR
    total_supply: Balance = ZERO_NEAR
    challenges_result: list[SlashedValidator] = field(default_factory=list)
    last_final_block: CryptoHash = field(default_factory=CryptoHash)
    last_ds_final_block: CryptoHash = field(default_factory=CryptoHash)
    next_bp_hash: CryptoHash = field(default_factory=CryptoHash)
    block_merkle_root: CryptoHash = field(default_factory=CryptoHash)
    approvals: list[Optional[Base58Signature]] = field(default_factory=list)
    signature: Optional[Base58Signature] = None
    latest_protocol_version: int = 0

    @classmethod
    def from_json(cls, data: object) -> "BlockHeaderView":
        data = _object(data, "block header")

        def mask_bit(value: object) -> bool:
            if not isinstance(value, bool):
                raise TypeError(f"chunk mask entries must be booleans, got {type(value).__name__}")
            return value

        return cls(
            height=_int(data, "height"),
            epoch_id=_hash(data, "epoch_id"),
            next_epoch_id=_hash(data, "next_epoch_id"),
            hash=_hash(data, "hash"),
            prev_hash=_hash(data, "prev_hash"),
            prev_state_root=_hash(data, "prev_state_root"),
            chunk_receipts_root=_hash(data, "chunk_receipts_root"),
            chunk_headers_root=_hash(data, "chunk_headers_root"),
            chunk_tx_root=_hash(data, "chunk_tx_root"),
            outcome_root=_hash(data, "outcome_root"),
            chunks_included=_int(data, "chunks_included"),
            challenges_root=_hash(data, "challenges_root"),
            timestamp=_int(data, "timestamp"),
            timestamp_nanosec=_balance(data, "timestamp_nanosec"),
            random_value=_hash(data, "random_value"),
            validator_proposals=_list(data, "validator_proposals", ValidatorStakeView.from_json),
            chunk_mask=_list(data, "chunk_mask", mask_bit),
            gas_price=_balance(data, "gas_price"),
            rent_paid=_balance(data, "rent_paid"),
            validator_reward=_balance(data, "validator_reward"),
            total_supply=_balance(data, "total_supply"),
            challenges_result=_list(data, "challenges_result", SlashedValidator.from_json),
            last_final_block=_hash(data, "last_final_block"),
            last_ds_final_block=_hash(data, "last_ds_final_block"),
            next_bp_hash=_hash(data, "next_bp_hash"),
            block_merkle_root=_hash(data, "block_merkle_root"),
            approvals=_list(data, "approvals", _base58_signature),
            signature=_base58_signature(data.get("signature")),
            latest_protocol_version=_int(data, "latest_protocol_version"),
        )


@dataclass
class BlockView:
    author: AccountID = ""
    header: BlockHeaderView = field(default_factory=BlockHeaderView)
    chunks: list[ChunkHeaderView] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "BlockView":
        data = _object(data, "block")
        header = data.get("header")
        return cls(
            author=_str(data, "author"),
            header=BlockHeaderView() if header is None else BlockHeaderView.from_json(header),
            chunks=_list(data, "chunks", ChunkHeaderView.from_json),
        )


TrieProofPath = list[str]


@dataclass
class StateItem:
    key: str = ""
    value: str = ""
    proof: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "StateItem":
        data = _object(data, "state item")
        return cls(
            key=_str(data, "key"),
            value=_str(data, "value"),
            proof=_list(data, "proof", _as_str),
        )


@dataclass
class ViewStateResult(QueryResponse):
    values: list[StateItem] = field(default_factory=list)
    proof: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "ViewStateResult":
        data = _object(data, "view state result")
        return cls(
            values=_list(data, "values", StateItem.from_json),
            proof=_list(data, "proof", _as_str),
            **_query_fields(data),
        )


@dataclass
class CallResult(QueryResponse):
    result: bytes = b""
    logs: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "CallResult":
        data = _object(data, "call result")
        return cls(
            result=_bytes(data, "result"),
            logs=_list(data, "logs", _as_str),
            **_query_fields(data),
        )


@dataclass
class GasPrice:
    gas_price: Balance = ZERO_NEAR

    @classmethod
    def from_json(cls, data: object) -> "GasPrice":
        data = _object(data, "gas price")
        return cls(gas_price=_balance(data, "gas_price"))