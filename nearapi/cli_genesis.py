"""Command that prints the genesis config of a network."""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Optional, Sequence

from .client import Client
from .config import NETWORKS


def _genesis_config(client: Client) -> dict[str, Any]:
    return client.genesis_config()


def _run(args: argparse.Namespace) -> None:
    network = NETWORKS.get(args.network)
    if network is None:
        raise ValueError(f"unknown network '{args.network}'")

    client = Client(network.node_url)
    try:
        config = _genesis_config(client)
    except Exception as error:
        raise RuntimeError(f"failed to query genesis config: {error}") from error
    print(json.dumps(config, indent=4))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="genesis", description="Gets genesis config for the network"
    )
    parser.add_argument(
        "--network", default=os.environ.get("NEAR_ENV", "testnet"), help="NEAR network"
    )
    args = parser.parse_args(argv)
    try:
        _run(args)
    except Exception as error:
        print(f"genesis: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())