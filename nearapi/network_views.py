"""Typed views of network and node status responses."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .hash import CryptoHash, b58decode
from .key import PublicKey
from .signature import ED25519_SIGNATURE_SIZE, Base58Signature, Signature
from .types import ZERO_NEAR, AccountID, Balance, BlockHeight, Nonce, NumBlocks, ShardID
from .views import (
    _as_str,
    _balance,
    _bool,
    _hash,
    _int,
    _list,
    _object,
    _optional_str,
    _public_key,
    _str,
)

_SIGNATURE_SIZE = 1 + ED25519_SIGNATURE_SIZE
_TIME_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?([Zz]|[+-]\d{2}:\d{2})"
)

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _time(data: dict[str, Any], key: str) -> datetime:
    """Parse an RFC 3339 timestamp; fractions beyond microseconds are dropped."""
    value = data.get(key)
    if value is None:
        return ZERO_TIME
    text = _as_str(value)
    match = _TIME_RE.fullmatch(text)
    if not match:
        raise ValueError(f"cannot parse time '{text}'")
    date, clock, fraction, zone = match.groups()
    micros = f".{fraction[:6].ljust(6, '0')}" if fraction else ""
    offset = "+00:00" if zone in ("Z", "z") else zone
    return datetime.fromisoformat(f"{date}T{clock}{micros}{offset}")


def _signature(value: object) -> Signature:
    if value is None:
        return Signature()
    if isinstance(value, str):
        parsed = Base58Signature.parse(value)
        return Signature(bytes([parsed.type.raw]) + b58decode(parsed.value))
    if isinstance(value, list):
        return Signature((bytes(value) + bytes(_SIGNATURE_SIZE))[:_SIGNATURE_SIZE])
    raise TypeError(f"signature must be a string or an array, got {type(value).__name__}")


@dataclass
class PeerInfo:
    id: PublicKey = field(default_factory=PublicKey)
    addr: Optional[str] = None
    account_id: Optional[AccountID] = None

    @classmethod
    def from_json(cls, data: object) -> "PeerInfo":
        data = _object(data, "peer info")
        return cls(
            id=_public_key(data.get("id")),
            addr=_optional_str(data, "addr"),
            account_id=_optional_str(data, "account_id"),
        )


@dataclass
class GenesisID:
    chain_id: str = ""
    hash: CryptoHash = field(default_factory=CryptoHash)

    @classmethod
    def from_json(cls, data: object) -> "GenesisID":
        data = _object(data, "genesis id")
        return cls(chain_id=_str(data, "chain_id"), hash=_hash(data, "hash"))


@dataclass
class PeerChainInfo:
    genesis_id: GenesisID = field(default_factory=GenesisID)
    height: BlockHeight = 0
    tracked_shards: list[ShardID] = field(default_factory=list)
    archival: bool = False

    @classmethod
    def from_json(cls, data: object) -> "PeerChainInfo":
        data = _object(data, "peer chain info")
        genesis = data.get("genesis_id")

        def shard(value: object) -> int:
            return _int({"shard": value}, "shard")

        return cls(
            genesis_id=GenesisID() if genesis is None else GenesisID.from_json(genesis),
            height=_int(data, "height"),
            tracked_shards=_list(data, "tracked_shards", shard),
            archival=_bool(data, "archival"),
        )


@dataclass
class EdgeInfo:
    nonce: Nonce = 0
    signature: Signature = field(default_factory=Signature)

    @classmethod
    def from_json(cls, data: object) -> "EdgeInfo":
        data = _object(data, "edge info")
        return cls(nonce=_int(data, "nonce"), signature=_signature(data.get("signature")))


@dataclass
class FullPeerInfo:
    peer_info: PeerInfo = field(default_factory=PeerInfo)
    chain_info: PeerChainInfo = field(default_factory=PeerChainInfo)
    edge_info: EdgeInfo = field(default_factory=EdgeInfo)

    @classmethod
    def from_json(cls, data: object) -> "FullPeerInfo":
        data = _object(data, "full peer info")
        peer = data.get("peer_info")
        chain = data.get("chain_info")
        edge = data.get("edge_info")
        return cls(
            peer_info=PeerInfo() if peer is None else PeerInfo.from_json(peer),
            chain_info=PeerChainInfo() if chain is None else PeerChainInfo.from_json(chain),
            edge_info=EdgeInfo() if edge is None else EdgeInfo.from_json(edge),
        )


@dataclass
class KnownProducer:
    account_id: AccountID = ""
    addr: Optional[str] = None
    peer_id: PublicKey = field(default_factory=PublicKey)

    @classmethod
    def from_json(cls, data: object) -> "KnownProducer":
        data = _object(data, "known producer")
        return cls(
            account_id=_str(data, "account_id"),
            addr=_optional_str(data, "addr"),
            peer_id=_public_key(data.get("peer_id")),
        )


@dataclass
class NetworkInfo:
    active_peers: list[FullPeerInfo] = field(default_factory=list)
    num_active_peers: int = 0
    peer_max_count: int = 0
    highest_height_peers: list[FullPeerInfo] = field(default_factory=list)
    sent_bytes_per_sec: int = 0
    received_bytes_per_sec: int = 0
    known_producers: list[KnownProducer] = field(default_factory=list)
    metric_recorder: Any = None
    peer_counter: int = 0

    @classmethod
    def from_json(cls, data: object) -> "NetworkInfo":
        data = _object(data, "network info")
        return cls(
            active_peers=_list(data, "active_peers", FullPeerInfo.from_json),
            num_active_peers=_int(data, "num_active_peers"),
            peer_max_count=_int(data, "peer_max_count"),
            highest_height_peers=_list(data, "highest_height_peers", FullPeerInfo.from_json),
            sent_bytes_per_sec=_int(data, "sent_bytes_per_sec"),
            received_bytes_per_sec=_int(data, "received_bytes_per_sec"),
            known_producers=_list(data, "known_producers", KnownProducer.from_json),
            metric_recorder=data.get("metric_recorder"),
            peer_counter=_int(data, "peer_counter"),
        )


@dataclass
class NodeVersion:
    version: str = ""
    build: str = ""

    @classmethod
    def from_json(cls, data: object) -> "NodeVersion":
        data = _object(data, "node version")
        return cls(version=_str(data, "version"), build=_str(data, "build"))


@dataclass
class ValidatorInfo:
    account_id: AccountID = ""
    slashed: bool = False

    @classmethod
    def from_json(cls, data: object) -> "ValidatorInfo":
        data = _object(data, "validator info")
        return cls(account_id=_str(data, "account_id"), slashed=_bool(data, "is_slashed"))


@dataclass
class StatusSyncInfo:
    latest_block_hash: CryptoHash = field(default_factory=CryptoHash)
    latest_block_height: BlockHeight = 0
    latest_block_time: datetime = ZERO_TIME
    syncing: bool = False

    @classmethod
    def from_json(cls, data: object) -> "StatusSyncInfo":
        data = _object(data, "sync info")
        return cls(
            latest_block_hash=_hash(data, "latest_block_hash"),
            latest_block_height=_int(data, "latest_block_height"),
            latest_block_time=_time(data, "latest_block_time"),
            syncing=_bool(data, "syncing"),
        )


@dataclass
class StatusResponse:
    version: NodeVersion = field(default_factory=NodeVersion)
    chain_id: str = ""
    protocol_version: int = 0
    latest_protocol_version: int = 0
    rpc_addr: str = ""
    validators: list[ValidatorInfo] = field(default_factory=list)
    sync_info: StatusSyncInfo = field(default_factory=StatusSyncInfo)
    validator_account_id: Optional[AccountID] = None

    @classmethod
    def from_json(cls, data: object) -> "StatusResponse":
        data = _object(data, "status response")
        version = data.get("version")
        sync_info = data.get("sync_info")
        return cls(
            version=NodeVersion() if version is None else NodeVersion.from_json(version),
            chain_id=_str(data, "chain_id"),
            protocol_version=_int(data, "protocol_version"),
            latest_protocol_version=_int(data, "latest_protocol_version"),
            rpc_addr=_str(data, "rpc_addr"),
            validators=_list(data, "validators", ValidatorInfo.from_json),
            sync_info=StatusSyncInfo() if sync_info is None else StatusSyncInfo.from_json(sync_info),
            validator_account_id=_optional_str(data, "validator_account_id"),
        )


@dataclass
class CurrentEpochValidatorInfo(ValidatorInfo):
    public_key: PublicKey = field(default_factory=PublicKey)
    stake: Balance = ZERO_NEAR
    shards: list[ShardID] = field(default_factory=list)
    num_produced_blocks: NumBlocks = 0
    num_expected_blocks: NumBlocks = 0

    @classmethod
    def from_json(cls, data: object) -> "CurrentEpochValidatorInfo":
        data = _object(data, "validator info")

        def shard(value: object) -> int:
            return _int({"shard": value}, "shard")

        return cls(
            **vars(ValidatorInfo.from_json(data)),
            public_key=_public_key(data.get("public_key")),
            stake=_balance(data, "stake"),
            shards=_list(data, "shards", shard),
            num_produced_blocks=_int(data, "num_produced_blocks"),
            num_expected_blocks=_int(data, "num_expected_blocks"),
        )


@dataclass
class ValidatorsResponse:
    current_validators: list[CurrentEpochValidatorInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: object) -> "ValidatorsResponse":
        data = _object(data, "validators response")
        return cls(
            current_validators=_list(data, "current_validator", CurrentEpochValidatorInfo.from_json)
        )