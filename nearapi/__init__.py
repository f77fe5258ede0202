"""Client, transaction types and command-line tools for the NEAR Protocol JSON-RPC API."""

__version__ = "0.1.0"