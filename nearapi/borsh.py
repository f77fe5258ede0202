"""A minimal Borsh binary encoder."""

from __future__ import annotations

import operator


class BorshWriter:
    """Accumulates Borsh-encoded values; every method returns the writer."""

    def __init__(self) -> None:
        self._data = bytearray()

    def _unsigned(self, value: int, size: int) -> "BorshWriter":
        number = operator.index(value)
        if not 0 <= number < 1 << (8 * size):
            raise ValueError(f"{number} does not fit into u{8 * size}")
        self._data += number.to_bytes(size, "little")
        return self

    def u8(self, value: int) -> "BorshWriter":
        return self._unsigned(value, 1)

    def u32(self, value: int) -> "BorshWriter":
        return self._unsigned(value, 4)

    def u64(self, value: int) -> "BorshWriter":
        return self._unsigned(value, 8)

    def u128(self, value: int) -> "BorshWriter":
        return self._unsigned(value, 16)

    def string(self, value: str) -> "BorshWriter":
        """A UTF-8 string with a u32 length prefix."""
        return self.blob(value.encode("utf-8"))

    def blob(self, data: bytes) -> "BorshWriter":
        """A byte sequence with a u32 length prefix."""
        raw = bytes(data)
        self.u32(len(raw))
        self._data += raw
        return self

    def fixed(self, data: bytes) -> "BorshWriter":
        """A fixed-size byte array, written as is."""
        self._data += bytes(data)
        return self

    def getvalue(self) -> bytes:
        return bytes(self._data)