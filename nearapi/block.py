"""Ways to name a block in RPC query parameters."""

from __future__ import annotations

from typing import Any, Callable

from .hash import CryptoHash

BlockCharacteristic = Callable[[dict[str, Any]], None]


def finality_optimistic() -> BlockCharacteristic:
    """The latest block recorded on the node that answers."""

    def apply(params: dict[str, Any]) -> None:
        params["finality"] = "optimistic"

    return apply


def finality_final() -> BlockCharacteristic:
    """A block validated by at least 66% of the nodes."""

    def apply(params: dict[str, Any]) -> None:
        params["finality"] = "final"

    return apply


def block_id(block_id: int) -> BlockCharacteristic:
    """A block given by its height."""
    if block_id < 0:
        raise ValueError(f"block id must not be negative, got {block_id}")
    height = int(block_id)

    def apply(params: dict[str, Any]) -> None:
        params["block_id"] = height

    return apply


def block_hash(block_hash: CryptoHash) -> BlockCharacteristic:
    """A block given by its hash."""
    encoded = str(block_hash)

    def apply(params: dict[str, Any]) -> None:
        params["block_id"] = encoded

    return apply


def block_hash_raw(block_hash: str) -> BlockCharacteristic:
    """A block given by its hash in base58 text."""

    def apply(params: dict[str, Any]) -> None:
        params["block_id"] = block_hash

    return apply