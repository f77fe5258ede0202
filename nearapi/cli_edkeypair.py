"""Command that generates a new ed25519 key pair."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from .hash import b58encode
from .key import KeyPair


def generate_credentials() -> dict[str, str]:
    """A fresh key pair with the implicit account id it controls."""
    private = Ed25519PrivateKey.generate()
    seed = private.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    public = private.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    key_pair = KeyPair.parse(f"ed25519:{b58encode(seed + public)}")
    return {
        "account_id": key_pair.public_key.to_public_key().hash(),
        "public_key": key_pair.public_key.to_json(),
        "private_key": key_pair.private_encoded(),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="edkeypair", description="Generate an ed25519 key pair")
    parser.parse_args(argv)
    try:
        credentials = generate_credentials()
    except Exception as error:
        print(f"failed to generate keypair: {error}", file=sys.stderr)
        return 1
    print(json.dumps(credentials, separators=(",", ":")))
    return 0


if __name__ == "__main__":
    sys.exit(main())