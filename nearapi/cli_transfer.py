"""Command that transfers NEAR between accounts."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from .action import Transfer
from .client import Client, context_with_key_pair, with_latest_block
from .config import NETWORKS
from .credentials import resolve_credentials
from .key import KeyPair
from .types import AccountID, Balance, balance_from_string
from .views import FinalExecutionOutcomeView


def _send(
    client: Client,
    sender: AccountID,
    recipient: AccountID,
    amount: Balance,
    key_pair: KeyPair,
) -> FinalExecutionOutcomeView:
    with context_with_key_pair(key_pair):
        return client.transaction_send_await(
            sender, recipient, [Transfer(amount)], with_latest_block()
        )


def _run(args: argparse.Namespace) -> None:
    try:
        amount = balance_from_string(args.amount)
    except Exception as error:
        raise ValueError(f"failed to parse amount '{args.amount}': {error}") from error

    network = NETWORKS.get(args.network)
    if network is None:
        raise ValueError(f"unknown network '{args.network}'")

    try:
        key_pair = resolve_credentials(args.network, args.sender)
    except Exception as error:
        raise RuntimeError(f"failed to load private key: {error}") from error

    client = Client(network.node_url)
    print(f"near network: {client.network_addr()}", file=sys.stderr)

    try:
        outcome = _send(client, args.sender, args.recipient, amount, key_pair)
    except Exception as error:
        raise RuntimeError(f"failed to do txn: {error}") from error

    print(
        f"tx url: {network.explorer_url}/transactions/{outcome.transaction.hash}",
        file=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="transfer", description="Transfer NEAR between accounts")
    parser.add_argument("--from", dest="sender", required=True, help="Sender account id")
    parser.add_argument(
        "--to", "--recipient", dest="recipient", required=True, help="Recipient account id"
    )
    parser.add_argument("--amount", required=True, help="Amount of NEAR to send")
    parser.add_argument(
        "--network", default=os.environ.get("NEAR_ENV", "testnet"), help="NEAR network"
    )
    args = parser.parse_args(argv)
    try:
        _run(args)
    except Exception as error:
        print(f"transfer: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())