"""Known NEAR networks and their endpoints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkInfo:
    network_id: str
    node_url: str
    wallet_url: str = ""
    helper_url: str = ""
    explorer_url: str = ""


def build_network_config(network_id: str) -> NetworkInfo:
    return NetworkInfo(
        network_id=network_id,
        node_url=f"https://rpc.{network_id}.near.org",
        wallet_url=f"https://wallet.{network_id}.near.org",
        helper_url=f"https://helper.{network_id}.near.org",
        explorer_url=f"https://explorer.{network_id}.near.org",
    )


NETWORKS: dict[str, NetworkInfo] = {
    "mainnet": build_network_config("mainnet"),
    "testnet": build_network_config("testnet"),
    "betanet": build_network_config("betanet"),
    "local": NetworkInfo(network_id="local", node_url="http://127.0.0.1:3030"),
}