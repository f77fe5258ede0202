"""A NEAR RPC client with typed responses and transaction helpers."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Sequence, TypeVar

from .action import Action
from .block import BlockCharacteristic, finality_final
from .hash import CryptoHash
from .jsonrpc import Client as JSONRPCClient
from .jsonrpc import Response
from .key import Base58PublicKey, KeyPair
from .network_views import NetworkInfo, StatusResponse, ValidatorsResponse
from .transaction import Transaction, sign_and_serialize_transaction
from .types import AccountID, Nonce
from .views import (
    AccessKeyList,
    AccessKeyView,
    AccountView,
    BlockView,
    CallResult,
    ChunkView,
    FinalExecutionOutcomeView,
    FinalExecutionOutcomeWithReceiptView,
    GasPrice,
    ViewStateResult,
)

T = TypeVar("T")

_current_key_pair: ContextVar[Optional[KeyPair]] = ContextVar("nearapi_key_pair", default=None)


@contextmanager
def context_with_key_pair(key_pair: KeyPair) -> Iterator[KeyPair]:
    """Make the key pair the default signer for transactions sent inside the block."""
    token = _current_key_pair.set(key_pair)
    try:
        yield key_pair
    finally:
        _current_key_pair.reset(token)


@dataclass
class _TransactionContext:
    transaction: Transaction
    key_pair: Optional[KeyPair]
    key_nonce_set: bool = False


TransactionOption = Callable[["Client", _TransactionContext], None]


def with_block_characteristic(block: BlockCharacteristic) -> TransactionOption:
    """Attach the transaction to the hash of the block that `block` names."""

    def apply(client: "Client", context: _TransactionContext) -> None:
        context.transaction.block_hash = client.block_details(block).header.hash

    return apply


def with_block_hash(block_hash: CryptoHash) -> TransactionOption:
    """Attach the transaction to the given block hash."""

    def apply(client: "Client", context: _TransactionContext) -> None:
        context.transaction.block_hash = block_hash

    return apply


def with_latest_block() -> TransactionOption:
    """Attach the transaction to the latest final block."""
    return with_block_characteristic(finality_final())


def with_key_pair(key_pair: KeyPair) -> TransactionOption:
    """Sign the transaction with the given key pair."""

    def apply(client: "Client", context: _TransactionContext) -> None:
        context.key_pair = key_pair

    return apply


def with_key_nonce(nonce: Nonce) -> TransactionOption:
    """Use this nonce instead of querying the access key for the next one."""

    def apply(client: "Client", context: _TransactionContext) -> None:
        context.transaction.nonce = nonce
        context.key_nonce_set = True

    return apply


def _block_id_params(block: BlockCharacteristic) -> list[Any]:
    params: dict[str, Any] = {}
    block(params)
    return [params.get("block_id")]


class Client:
    """Calls NEAR RPC methods on one node."""

    def __init__(self, network_addr: str) -> None:
        self.rpc = JSONRPCClient(network_addr)

    def network_addr(self) -> str:
        return self.rpc.url

    def _call(
        self, method: str, params: Any, block: Optional[BlockCharacteristic] = None
    ) -> Response:
        if block is not None and isinstance(params, dict):
            block(params)
        response = self.rpc.call(method, params)
        if response.error is not None:
            raise response.error
        return response

    def _query(
        self,
        parse: Callable[[Any], T],
        method: str,
        params: Any,
        block: Optional[BlockCharacteristic] = None,
    ) -> T:
        return parse(self._call(method, params, block).result)

    def access_key_view(
        self, account_id: AccountID, public_key: Base58PublicKey, block: BlockCharacteristic
    ) -> AccessKeyView:
        params = {
            "request_type": "view_access_key",
            "account_id": account_id,
            "public_key": public_key.to_json(),
        }
        return self._query(AccessKeyView.from_json, "query", params, block)

    def access_key_view_list(
        self, account_id: AccountID, block: BlockCharacteristic
    ) -> AccessKeyList:
        params = {"request_type": "view_access_key_list", "account_id": account_id}
        return self._query(AccessKeyList.from_json, "query", params, block)

    def access_key_view_changes(
        self, account_id: AccountID, public_key: Base58PublicKey, block: BlockCharacteristic
    ) -> Response:
        params = {
            "changes_type": "single_access_key_changes",
            "keys": {"account_id": account_id, "public_key": public_key.to_json()},
        }
        return self._call("EXPERIMENTAL_changes", params, block)

    def access_key_view_changes_all(
        self, account_ids: Sequence[AccountID], block: BlockCharacteristic
    ) -> Response:
        params = {"changes_type": "all_access_key_changes", "account_ids": list(account_ids)}
        return self._call("EXPERIMENTAL_changes", params, block)

    def account_view(self, account_id: AccountID, block: BlockCharacteristic) -> AccountView:
        params = {"request_type": "view_account", "account_id": account_id}
        return self._query(AccountView.from_json, "query", params, block)

    def account_view_changes(
        self, account_ids: Sequence[AccountID], block: BlockCharacteristic
    ) -> Response:
        params = {"changes_type": "account_changes", "account_ids": list(account_ids)}
        return self._call("EXPERIMENTAL_changes", params, block)

    def block_details(self, block: BlockCharacteristic) -> BlockView:
        return self._query(BlockView.from_json, "block", {}, block)

    def block_changes(self, block: BlockCharacteristic) -> Response:
        return self._call("EXPERIMENTAL_changes_in_block", {}, block)

    def chunk_details(self, chunk_hash: CryptoHash) -> ChunkView:
        return self._query(ChunkView.from_json, "chunk", [str(chunk_hash)])

    def contract_view_state(
        self, account_id: AccountID, prefix_base64: str, block: BlockCharacteristic
    ) -> ViewStateResult:
        params = {
            "request_type": "view_state",
            "account_id": account_id,
            "prefix_base64": prefix_base64,
        }
        return self._query(ViewStateResult.from_json, "query", params, block)

    def contract_view_state_changes(
        self,
        account_ids: Sequence[AccountID],
        key_prefix_base64: str,
        block: BlockCharacteristic,
    ) -> Response:
        params = {
            "changes_type": "data_changes",
            "account_ids": list(account_ids),
            "key_prefix_base64": key_prefix_base64,
        }
        return self._call("EXPERIMENTAL_changes", params, block)

    def contract_view_code_changes(
        self, account_ids: Sequence[AccountID], block: BlockCharacteristic
    ) -> Response:
        params = {"changes_type": "contract_code_changes", "account_ids": list(account_ids)}
        return self._call("EXPERIMENTAL_changes", params, block)

    def contract_view_call_function(
        self,
        account_id: AccountID,
        method_name: str,
        args_base64: str,
        block: BlockCharacteristic,
    ) -> CallResult:
        params = {
            "request_type": "call_function",
            "account_id": account_id,
            "method_name": method_name,
            "args_base64": args_base64,
        }
        return self._query(CallResult.from_json, "query", params, block)

    def gas_price_view(self, block: BlockCharacteristic) -> GasPrice:
        return self._query(GasPrice.from_json, "gas_price", _block_id_params(block))

    def genesis_config(self) -> dict[str, Any]:
        result = self._call("EXPERIMENTAL_genesis_config", None).result
        return {} if result is None else dict(result)

    def network_info(self) -> NetworkInfo:
        return self._query(NetworkInfo.from_json, "network_info", [])

    def network_status_validators(self) -> StatusResponse:
        return self._query(StatusResponse.from_json, "status", [])

    def network_status_validators_detailed(
        self, block: BlockCharacteristic
    ) -> ValidatorsResponse:
        return self._query(ValidatorsResponse.from_json, "validators", _block_id_params(block))

    def rpc_transaction_send(self, signed_txn_base64: str) -> CryptoHash:
        return self._query(CryptoHash.from_json, "broadcast_tx_async", [signed_txn_base64])

    def rpc_transaction_send_await(self, signed_txn_base64: str) -> FinalExecutionOutcomeView:
        return self._query(
            FinalExecutionOutcomeView.from_json, "broadcast_tx_commit", [signed_txn_base64]
        )

    def transaction_status(self, tx: CryptoHash, sender: AccountID) -> FinalExecutionOutcomeView:
        return self._query(FinalExecutionOutcomeView.from_json, "tx", [str(tx), sender])

    def transaction_status_with_receipts(
        self, tx: CryptoHash, sender: AccountID
    ) -> FinalExecutionOutcomeWithReceiptView:
        return self._query(
            FinalExecutionOutcomeWithReceiptView.from_json,
            "EXPERIMENTAL_tx_status",
            [str(tx), sender],
        )

    def _prepare_transaction(
        self,
        sender: AccountID,
        receiver: AccountID,
        actions: Sequence[Action],
        options: Sequence[TransactionOption],
    ) -> str:
        context = _TransactionContext(
            transaction=Transaction(signer_id=sender, receiver_id=receiver, actions=list(actions)),
            key_pair=_current_key_pair.get(),
        )
        for option in options:
            option(self, context)

        key_pair = context.key_pair
        if key_pair is None:
            raise ValueError("no keypair specified")

        context.transaction.public_key = key_pair.public_key.to_public_key()

        if not context.key_nonce_set:
            access_key = self.access_key_view(
                context.transaction.signer_id, key_pair.public_key, finality_final()
            )
            context.transaction.nonce = access_key.nonce + 1
            context.key_nonce_set = True

        return sign_and_serialize_transaction(key_pair, context.transaction)

    def transaction_send(
        self,
        sender: AccountID,
        receiver: AccountID,
        actions: Sequence[Action],
        *args: TransactionOption,
    ) -> CryptoHash:
        """Sign and broadcast a transaction without waiting for its outcome."""
        blob = self._prepare_transaction(sender, receiver, actions, args)
        return self.rpc_transaction_send(blob)

    def transaction_send_await(
        self,
        sender: AccountID,
        receiver: AccountID,
        actions: Sequence[Action],
        *args: TransactionOption,
    ) -> FinalExecutionOutcomeView:
        """Sign and broadcast a transaction, waiting for its final outcome."""
        blob = self._prepare_transaction(sender, receiver, actions, args)
        return self.rpc_transaction_send_await(blob)