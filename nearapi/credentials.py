"""Loading account key pairs from the local credentials directory."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from .key import Base58PublicKey, KeyPair
from .types import AccountID


def resolve_credentials(
    network_name: str,
    account_id: AccountID,
    home: Optional[Union[str, Path]] = None,
) -> KeyPair:
    """Read ``~/.near-credentials/<network>/<account>.json`` and return its key pair.

    Raises ``ValueError`` when the stored public key does not belong to the
    stored private key.
    """
    base = Path.home() if home is None else Path(home)
    path = base / ".near-credentials" / network_name / f"{account_id}.json"
    with path.open(encoding="utf-8") as handle:
        creds = json.load(handle)
    if not isinstance(creds, dict):
        raise ValueError(f"{path} must hold a JSON object")

    public_key = Base58PublicKey.from_json(creds.get("public_key"))
    key_pair = KeyPair.from_json(creds.get("private_key"))

    stored, derived = public_key.to_json(), key_pair.public_key.to_json()
    if stored != derived:
        raise ValueError(f"inconsistent public key, {stored} != {derived}")
    return key_pair