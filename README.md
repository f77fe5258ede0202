# nearapi

A Python client for the NEAR Protocol JSON-RPC API, together with the types
needed to build, sign and send transactions, and a handful of small
command-line tools.

## What it provides

- `nearapi.types`: yoctoNEAR balances (`Balance`, `near_to_yocto`,
  `yocto_to_near`, `balance_from_string`, `balance_from_float`) and
  `DEFAULT_FUNCTION_CALL_GAS` (30 TGas).
- `nearapi.hash`: `CryptoHash` (SHA-256 digests shown in base58) and the
  `b58encode` / `b58decode` helpers.
- `nearapi.key` and `nearapi.signature`: ed25519 public keys (`PublicKey`,
  `Base58PublicKey`), key pairs (`KeyPair`) and signatures (`Signature`,
  `Base58Signature`) in the `ed25519:<base58>` text form.
- `nearapi.borsh`: `BorshWriter`, a small Borsh encoder.
- `nearapi.action`: transaction actions (`CreateAccount`, `DeployContract`,
  `FunctionCall`, `Transfer`, `Stake`, `AddKey`, `DeleteKey`,
  `DeleteAccount`) and `AccessKeyPermission`.
- `nearapi.transaction`: `Transaction`, `SignedTransaction` and
  `sign_and_serialize_transaction`, which returns the base64 form the RPC
  node accepts.
- `nearapi.block`: block selectors (`finality_final`, `finality_optimistic`,
  `block_id`, `block_hash`, `block_hash_raw`).
- `nearapi.jsonrpc`: a plain JSON-RPC 2.0 client over HTTP (`Client`,
  `Response`, `JSONRPCError`).
- `nearapi.client.Client`: typed RPC calls for accounts, access keys, blocks,
  chunks, contract state and view calls, gas price, genesis config, network
  status, validators and transactions.
- `nearapi.views` and `nearapi.network_views`: the dataclasses those calls
  return, each with a `from_json` constructor.
- `nearapi.credentials.resolve_credentials`: loads a key pair from the local
  credentials directory.
- `nearapi.config`: known networks in `NETWORKS` (`mainnet`, `testnet`,
  `betanet`, `local`).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
from nearapi.block import finality_final
from nearapi.client import Client
from nearapi.types import balance_from_string, yocto_to_near

client = Client("http://127.0.0.1:3030")

block = client.block_details(finality_final())
print(block.header.height, block.header.hash)

account = client.account_view("example.testnet", finality_final())
print(yocto_to_near(account.amount))

print(balance_from_string("1.5"))  # 1500000000000000000000000
```

Transactions are sent with `Client.transaction_send` (returns the
transaction hash) or `Client.transaction_send_await` (returns the final
execution outcome). Both take the sender, the receiver, a list of actions and
any number of options: `with_latest_block()`, `with_block_hash(...)`,
`with_block_characteristic(...)`, `with_key_pair(...)` and
`with_key_nonce(...)`. Instead of `with_key_pair`, a signer can be set for a
whole block of code with `with context_with_key_pair(key_pair): ...`. When no
nonce is given, the current access-key nonce is queried and incremented by
one. Without any key pair, `ValueError("no keypair specified")` is raised.

```python
from nearapi.action import Transfer
from nearapi.client import Client, with_key_pair, with_latest_block
from nearapi.credentials import resolve_credentials
from nearapi.types import near_to_yocto

key_pair = resolve_credentials("testnet", "example.testnet")
client = Client("https://rpc.testnet.near.org")
outcome = client.transaction_send_await(
    "example.testnet",
    "receiver.testnet",
    [Transfer(near_to_yocto(1))],
    with_latest_block(),
    with_key_pair(key_pair),
)
print(outcome.transaction.hash)
```

RPC failures reported by the node are raised as
`nearapi.jsonrpc.JSONRPCError`.

## Command-line tools

Every tool takes `--network` (default `testnet`, or the value of the
`NEAR_ENV` environment variable). On failure a tool prints the error to
standard error and exits with status 1.

Show the latest final block:

```
near-block --network testnet
```

Print the genesis configuration as JSON:

```
near-genesis
```

Generate a fresh ed25519 key pair, printed as a JSON document with
`account_id` (the implicit account: the hex public key), `public_key` and
`private_key`:

```
near-edkeypair
```

List the access keys of an account, or show a single key with `--key`:

```
near-keys --account example.testnet
```

Call a view method (the result is printed as a hex dump), or a change method
signed with your stored credentials (`--gas` defaults to 30 TGas,
`--deposit` is in NEAR):

```
near-funcall --target example.testnet --method get_status --args '{"account_id": "example.testnet"}'
near-funcall --mode change --account example.testnet --target example.testnet --method set_status --args '{"message": "hello"}' --deposit 0.1
```

Transfer NEAR between accounts (`--recipient` is an alias of `--to`):

```
near-transfer --from example.testnet --to receiver.testnet --amount 1.25
```

The change call and the transfer read the signer's key from
`~/.near-credentials/<network>/<account>.json`, a JSON document with
`account_id`, `public_key` and `private_key` fields; the public key must match
the one derived from the private key.

## Limitations

- Only ed25519 keys and signatures are supported; secp256k1 keys are
  recognised by name but every operation on them raises `ValueError`.
- The `*_changes` methods of `Client` (`access_key_view_changes`,
  `account_view_changes`, `block_changes`, `contract_view_state_changes`,
  and the like) return the raw `nearapi.jsonrpc.Response` rather than a
  typed view.
- Some parts of the responses are kept as plain JSON values: receipts,
  transaction failures, chunk `prev_state_root` and the network
  `metric_recorder`.
- The client is synchronous and has no retries or timeouts of its own.