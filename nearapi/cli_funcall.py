"""Command that calls a function on a smart contract."""

from __future__ import annotations

import argparse
import base64
import os
import sys
from typing import Optional, Sequence

from .action import FunctionCall
from .block import finality_final
from .client import Client, with_key_pair, with_latest_block
from .config import NETWORKS, NetworkInfo
from .credentials import resolve_credentials
from .key import KeyPair
from .types import AccountID, Gas, balance_from_string, near_to_yocto
from .views import CallResult, FinalExecutionOutcomeView

_DEFAULT_FUNCTION_CALL_GAS = 30 * 1_000_000_000_000


def _log(message: str) -> None:
    print(message, file=sys.stderr)


def _hex_dump(data: bytes) -> str:
    """Sixteen bytes per line: offset, hex in two groups of eight, printable text."""
    lines = []
    for offset in range(0, len(data), 16):
        chunk = data[offset : offset + 16]
        left = " ".join(f"{byte:02x}" for byte in chunk[:8])
        right = " ".join(f"{byte:02x}" for byte in chunk[8:])
        text = "".join(chr(byte) if 32 <= byte <= 126 else "." for byte in chunk)
        lines.append(f"{offset:08x}  {left:<23}  {right:<23}  |{text}|\n")
    return "".join(lines)


def view_function(
    client: Client, target: AccountID, method: str, args: Optional[bytes]
) -> CallResult:
    """Call a view method and print its logs and result."""
    args_base64 = base64.b64encode(args or b"").decode("ascii")
    result = client.contract_view_call_function(target, method, args_base64, finality_final())

    if result.logs:
        _log("logs:")
        for line in result.logs:
            _log(f"- {line}")

    _log("result:")
    if not result.result:
        print("(empty)")
    else:
        print(_hex_dump(result.result), end="")
    return result


def change_function(
    client: Client,
    account: AccountID,
    target: AccountID,
    method: str,
    args: Optional[bytes],
    gas: Gas,
    deposit: Optional[str],
    key_pair: KeyPair,
    network: NetworkInfo,
) -> FinalExecutionOutcomeView:
    """Sign and send a function call, then print the logs of its receipts."""
    amount = near_to_yocto(0)
    if deposit is not None:
        try:
            amount = balance_from_string(deposit)
        except Exception as error:
            raise ValueError(f"failed to parse amount '{deposit}': {error}") from error

    try:
        outcome = client.transaction_send_await(
            account,
            target,
            [FunctionCall(method, args or b"", gas, amount)],
            with_latest_block(),
            with_key_pair(key_pair),
        )
    except Exception as error:
        raise RuntimeError(f"failed to do txn: {error}") from error

    entries: dict[str, tuple[str, list[str]]] = {}
    for receipt in outcome.receipts_outcome:
        if not receipt.outcome.logs:
            continue
        _, lines = entries.setdefault(str(receipt.id), (receipt.outcome.executor_id, []))
        lines.extend(receipt.outcome.logs)

    if entries:
        single = len(entries) == 1
        _log("logs:")
        for receipt in outcome.receipts_outcome:
            entry = entries.get(str(receipt.id))
            if entry is None:
                continue
            executor, lines = entry
            for line in lines:
                if single:
                    _log(f"- {line}")
                else:
                    _log(f"- ({receipt.id} / {executor}) {line}")

    _log(f"tx id: {network.explorer_url}/transactions/{outcome.transaction.hash}")
    return outcome


def _run(args: argparse.Namespace) -> None:
    network = NETWORKS.get(args.network)
    if network is None:
        raise ValueError(f"unknown network '{args.network}'")

    client = Client(network.node_url)
    _log(f"near network: {client.network_addr()}")

    call_args = None if args.call_args is None else args.call_args.encode("utf-8")

    if args.mode == "view":
        try:
            view_function(client, args.target, args.method, call_args)
        except Exception as error:
            raise RuntimeError(f"failed to call view function: {error}") from error
    elif args.mode == "change":
        if args.account is None:
            raise ValueError("--account is required for change function call")
        try:
            key_pair = resolve_credentials(network.network_id, args.account)
        except Exception as error:
            raise RuntimeError(f"failed to load private key: {error}") from error
        try:
            change_function(
                client,
                args.account,
                args.target,
                args.method,
                call_args,
                args.gas,
                args.deposit,
                key_pair,
                network,
            )
        except Exception as error:
            raise RuntimeError(f"failed to call change function: {error}") from error
    else:
        raise ValueError(
            f"either 'change' or 'view' is accepted, you supplied '{args.mode}'"
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="funcall", description="Calls function on a smart contract"
    )
    parser.add_argument("--account", help="Account id")
    parser.add_argument(
        "--target", required=True, help="Account id whose smart contract to call"
    )
    parser.add_argument("--mode", default="view", help="Call mode, either 'view' or 'change'")
    parser.add_argument("--deposit", help="Amount of NEAR to deposit")
    parser.add_argument(
        "--gas",
        type=int,
        default=_DEFAULT_FUNCTION_CALL_GAS,
        help="Amount of gas to attach for this transaction",
    )
    parser.add_argument("--method", required=True, help="Method to call on specified contract")
    parser.add_argument(
        "--args",
        dest="call_args",
        help="Arguments to pass for specified method. Accepts both JSON and Base64 payload",
    )
    parser.add_argument(
        "--network", default=os.environ.get("NEAR_ENV", "testnet"), help="NEAR network"
    )
    args = parser.parse_args(argv)
    try:
        _run(args)
    except Exception as error:
        print(f"funcall: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())