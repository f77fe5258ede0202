"""Command that shows the access keys of an account."""

from __future__ import annotations

import argparse
import os
import sys
from pprint import pformat
from typing import Optional, Sequence, Union

from .block import finality_final
from .client import Client
from .config import NETWORKS
from .key import Base58PublicKey
from .types import AccountID
from .views import AccessKeyList, AccessKeyView


def _query_keys(
    client: Client, account: AccountID, raw_key: Optional[str]
) -> Union[AccessKeyView, AccessKeyList]:
    """One access key when `raw_key` is given, otherwise all of the account's keys."""
    if raw_key is not None:
        try:
            public_key = Base58PublicKey.parse(raw_key)
        except Exception as error:
            raise ValueError(f"failed to parse access pubkey: {error}") from error
        try:
            return client.access_key_view(account, public_key, finality_final())
        except Exception as error:
            raise RuntimeError(f"failed to query access key: {error}") from error
    try:
        return client.access_key_view_list(account, finality_final())
    except Exception as error:
        raise RuntimeError(f"failed to query access key list: {error}") from error


def _run(args: argparse.Namespace) -> None:
    network = NETWORKS.get(args.network)
    if network is None:
        raise ValueError(f"unknown network '{args.network}'")

    client = Client(network.node_url)
    print(f"near network: {client.network_addr()}", file=sys.stderr)
    print(pformat(_query_keys(client, args.account, args.key)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="keys", description="Display access keys attached to an account"
    )
    parser.add_argument("--account", required=True, help="Account id")
    parser.add_argument("--key", help="Specific key to query. Otherwise shows all access keys")
    parser.add_argument(
        "--network", default=os.environ.get("NEAR_ENV", "testnet"), help="NEAR network"
    )
    args = parser.parse_args(argv)
    try:
        _run(args)
    except Exception as error:
        print(f"keys: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())