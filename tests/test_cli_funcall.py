import base64
import hashlib
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from nearapi.cli_funcall import change_function, main, view_function
from nearapi.client import Client
from nearapi.config import build_network_config
from nearapi.hash import b58encode
from nearapi.key import KeyPair
from nearapi.types import balance_from_string

HASH = b58encode(bytes(range(32)))
RECEIPT_A = b58encode(bytes(range(1, 33)))
RECEIPT_B = b58encode(bytes(range(2, 34)))


class _Node:
    def __init__(self):
        self.results = {}
        self.calls = []
        self.url = ""


@pytest.fixture
def node():
    state = _Node()

    class Handler(BaseHTTPRequestHandler):
        def do_POST(self):
            request = json.loads(self.rfile.read(int(self.headers["Content-Length"])))
            state.calls.append(request)
            payload = {"jsonrpc": "2.0", "id": request.get("id")}
            if request["method"] in state.results:
                payload["result"] = state.results[request["method"]]
            else:
                payload["error"] = {"code": -32601, "message": "Method not found", "data": None}
            body = json.dumps(payload).encode()
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    state.url = f"http://127.0.0.1:{server.server_address[1]}"
    yield state
    server.shutdown()
    server.server_close()


def _key_pair():
    private = Ed25519PrivateKey.generate()
    seed = private.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    public = private.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    return KeyPair.parse("ed25519:" + b58encode(seed + public)), public


class _Reader:
    def __init__(self, data):
        self.data = data
        self.pos = 0

    def take(self, size):
        chunk = self.data[self.pos : self.pos + size]
        self.pos += size
        return chunk

    def uint(self, size):
        return int.from_bytes(self.take(size), "little")

    def blob(self):
        return self.take(self.uint(4))


def _decode_function_call(blob):
    reader = _Reader(base64.b64decode(blob))
    decoded = {
        "signer": reader.blob().decode(),
        "public_key": reader.take(33),
        "nonce": reader.uint(8),
        "receiver": reader.blob().decode(),
        "block_hash": reader.take(32),
        "actions": reader.uint(4),
        "kind": reader.uint(1),
        "method": reader.blob().decode(),
        "args": reader.blob(),
        "gas": reader.uint(8),
        "deposit": reader.uint(16),
    }
    decoded["body"] = reader.data[: reader.pos]
    decoded["signature"] = reader.data[reader.pos :]
    return decoded


def _prepare_change(node, receipts):
    node.results["block"] = {"author": "v.test", "header": {"height": 7, "hash": HASH}}
    node.results["query"] = {
        "nonce": 5,
        "permission": "FullAccess",
        "block_height": 7,
        "block_hash": HASH,
    }
    node.results["broadcast_tx_commit"] = {
        "status": {"SuccessValue": ""},
        "transaction": {"signer_id": "alice.test", "hash": HASH},
        "receipts_outcome": receipts,
    }


def _broadcast_blob(node):
    (call,) = [call for call in node.calls if call["method"] == "broadcast_tx_commit"]
    return call["params"][0]


def test_view_function_prints_logs_and_dump(node, capsys):
    node.results["query"] = {"result": list(b"hi"), "logs": ["note"], "block_height": 1, "block_hash": HASH}
    args = b'{"a":1}'

    result = view_function(Client(node.url), "app.test", "get", args)

    assert result.result == b"hi"
    params = node.calls[0]["params"]
    assert params["request_type"] == "call_function"
    assert params["account_id"] == "app.test"
    assert params["method_name"] == "get"
    assert params["args_base64"] == base64.b64encode(args).decode()
    assert params["finality"] == "final"
    captured = capsys.readouterr()
    assert captured.out.startswith("00000000  68 69 ")
    assert captured.out.endswith("|hi|\n")
    assert "- note" in captured.err


def test_view_function_empty_result(node, capsys):
    node.results["query"] = {"result": [], "logs": [], "block_height": 1, "block_hash": HASH}

    view_function(Client(node.url), "app.test", "get", None)

    assert capsys.readouterr().out == "(empty)\n"
    assert node.calls[0]["params"]["args_base64"] == ""


def test_view_function_dump_spans_lines(node, capsys):
    payload = bytes(range(40))
    node.results["query"] = {"result": list(payload), "logs": [], "block_height": 1, "block_hash": HASH}

    view_function(Client(node.url), "app.test", "get", None)

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert [line[:8] for line in lines] == ["00000000", "00000010", "00000020"]
    assert len({line.index("|") for line in lines}) == 1


def test_change_function_signs_and_sends(node, capsys):
    _prepare_change(
        node,
        [{"id": RECEIPT_A, "block_hash": HASH, "outcome": {"logs": ["first", "second"], "executor_id": "app.test"}}],
    )
    key_pair, public = _key_pair()
    network = build_network_config("testnet")

    outcome = change_function(
        Client(node.url), "alice.test", "app.test", "go", b"{}", 1000, None, key_pair, network
    )

    assert str(outcome.transaction.hash) == HASH
    decoded = _decode_function_call(_broadcast_blob(node))
    assert decoded["signer"] == "alice.test"
    assert decoded["public_key"] == b"\x00" + public
    assert decoded["nonce"] == 6
    assert decoded["receiver"] == "app.test"
    assert decoded["block_hash"] == bytes(range(32))
    assert decoded["actions"] == 1
    assert decoded["kind"] == 2
    assert decoded["method"] == "go"
    assert decoded["args"] == b"{}"
    assert decoded["gas"] == 1000
    assert decoded["deposit"] == 0
    assert decoded["signature"][0] == 0
    digest = hashlib.sha256(decoded["body"]).digest()
    assert key_pair.public_key.to_public_key().verify(digest, key_pair.sign(digest))
    err = capsys.readouterr().err
    assert "- first" in err
    assert "- second" in err
    assert f"{network.explorer_url}/transactions/{HASH}" in err


def test_change_function_labels_logs_of_several_receipts(node, capsys):
    _prepare_change(
        node,
        [
            {"id": RECEIPT_A, "block_hash": HASH, "outcome": {"logs": ["one"], "executor_id": "app.test"}},
            {"id": RECEIPT_B, "block_hash": HASH, "outcome": {"logs": ["two"], "executor_id": "other.test"}},
        ],
    )
    key_pair, _ = _key_pair()

    change_function(
        Client(node.url), "alice.test", "app.test", "go", None, 1000, None, key_pair,
        build_network_config("testnet"),
    )

    err = capsys.readouterr().err
    assert f"- ({RECEIPT_A} / app.test) one" in err
    assert f"- ({RECEIPT_B} / other.test) two" in err


def test_change_function_attaches_deposit(node):
    _prepare_change(node, [])
    key_pair, _ = _key_pair()

    change_function(
        Client(node.url), "alice.test", "app.test", "go", None, 1000, "0.5", key_pair,
        build_network_config("testnet"),
    )

    assert _decode_function_call(_broadcast_blob(node))["deposit"] == int(balance_from_string("0.5"))


def test_change_function_rejects_bad_deposit(node):
    key_pair, _ = _key_pair()
    with pytest.raises(ValueError, match="failed to parse amount 'abc'"):
        change_function(
            Client(node.url), "alice.test", "app.test", "go", None, 1000, "abc", key_pair,
            build_network_config("testnet"),
        )
    assert node.calls == []


def test_main_rejects_unknown_mode(capsys):
    assert main(["--target", "app.test", "--method", "go", "--mode", "peek"]) == 1
    assert "you supplied 'peek'" in capsys.readouterr().err


def test_main_change_requires_account(capsys):
    assert main(["--target", "app.test", "--method", "go", "--mode", "change"]) == 1
    assert "--account is required" in capsys.readouterr().err


def test_main_rejects_unknown_network(capsys):
    assert main(["--target", "app.test", "--method", "go", "--network", "nowhere"]) == 1
    assert "unknown network 'nowhere'" in capsys.readouterr().err


def test_main_requires_target():
    with pytest.raises(SystemExit):
        main(["--method", "go"])