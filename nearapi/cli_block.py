"""Command that shows the latest final block."""

from __future__ import annotations

import argparse
import os
import sys
from pprint import pformat
from typing import Optional, Sequence

from .block import finality_final
from .client import Client
from .config import NETWORKS
from .views import BlockView


def _latest_block(client: Client) -> BlockView:
    return client.block_details(finality_final())


def _run(args: argparse.Namespace) -> None:
    network = NETWORKS.get(args.network)
    if network is None:
        raise ValueError(f"unknown network '{args.network}'")

    client = Client(network.node_url)
    try:
        block = _latest_block(client)
    except Exception as error:
        raise RuntimeError(f"failed to query latest block info: {error}") from error
    print(pformat(block))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="block", description="View latest block info")
    parser.add_argument(
        "--network", default=os.environ.get("NEAR_ENV", "testnet"), help="NEAR network"
    )
    args = parser.parse_args(argv)
    try:
        _run(args)
    except Exception as error:
        print(f"block: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())