"""A small JSON-RPC 2.0 client over HTTP."""

from __future__ import annotations

import itertools
import json
import threading
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

JSONRPC_VERSION = "2.0"

CODE_PARSE_ERROR = -32700
CODE_INVALID_REQUEST = -32600
CODE_METHOD_NOT_FOUND = -32601
CODE_INVALID_PARAMS = -32602
CODE_INTERNAL_ERROR = -32603

CODE_SERVER_ERROR_RANGE_START = -32099
CODE_SERVER_ERROR_RANGE_END = -32000


class JSONRPCError(Exception):
    """An error object returned by the server."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(code, message, data)

    def __str__(self) -> str:
        data = "" if self.data is None else json.dumps(self.data, separators=(",", ":"))
        return f"JSON-RPC error '{self.message}' ({self.code}) {data}"


@dataclass
class Response:
    jsonrpc: str = ""
    id: Any = ""
    method: str = ""
    error: Optional[JSONRPCError] = None
    result: Any = None

    @classmethod
    def from_json(cls, data: object) -> "Response":
        if not isinstance(data, dict):
            raise TypeError(f"JSON-RPC response must be an object, got {type(data).__name__}")
        error = data.get("error")
        if error is not None:
            error = JSONRPCError(
                int(error.get("code", 0)), str(error.get("message", "")), error.get("data")
            )
        return cls(
            jsonrpc=data.get("jsonrpc", ""),
            id=data.get("id", ""),
            method=data.get("method", ""),
            error=error,
            result=data.get("result"),
        )


def parse_response(body: Any) -> Response:
    """Decode a response from bytes, text or a readable stream."""
    if hasattr(body, "read"):
        body = body.read()
    return Response.from_json(json.loads(body))


def _encode(value: Any) -> Any:
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


class Client:
    """Posts JSON-RPC requests to one endpoint."""

    def __init__(self, url: str) -> None:
        urlsplit(url)
        self.url = url
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def call(self, method: str, params: Any = None) -> Response:
        """Send one request and return the decoded response."""
        payload: dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "id": str(self.next_id()),
            "method": method,
        }
        if params is not None:
            payload["params"] = params
        request = urllib.request.Request(
            self.url,
            data=json.dumps(payload, default=_encode).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(request) as response:
                return parse_response(response)
        except urllib.error.HTTPError as exc:
            with exc:
                return parse_response(exc)