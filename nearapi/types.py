"""Basic NEAR value types: balances in yoctoNEAR and common aliases."""

from __future__ import annotations

import math
import re
from fractions import Fraction

AccountID = str
Gas = int
Nonce = int
BlockHeight = int
ShardID = int
StorageUsage = int
NumBlocks = int

UINT64_MAX = 2**64 - 1
UINT128_MAX = 2**128 - 1
YOCTO_PER_NEAR = 10**24

# 30 TGas
DEFAULT_FUNCTION_CALL_GAS: Gas = 30 * 1_000_000_000_000

_FLOAT_PRECISION = 128
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class Balance(int):
    """An amount of yoctoNEAR, limited to an unsigned 128-bit integer."""

    def __new__(cls, value: int = 0) -> "Balance":
        amount = int.__new__(cls, value)
        if not 0 <= amount <= UINT128_MAX:
            raise ValueError(f"balance {int(amount)} does not fit into 128 bits")
        return amount

    def __repr__(self) -> str:
        return f"Balance({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)

    @classmethod
    def from_json(cls, value: object) -> "Balance":
        """Parse the decimal string form used in JSON."""
        if not isinstance(value, str):
            raise TypeError(f"balance must be a JSON string, got {type(value).__name__}")
        if not _INTEGER_RE.fullmatch(value):
            raise ValueError(f"unable to parse '{value}'")
        return cls(int(value))

    def to_json(self) -> str:
        return str(self)

    def div(self, divisor: int) -> "Balance":
        """Integer division, truncating."""
        return Balance(int(self) // divisor)


TimeNanos = Balance

ZERO_NEAR = Balance(0)


def near_to_yocto(near: int) -> Balance:
    """Convert a whole amount of NEAR into yoctoNEAR."""
    if not 0 <= near <= UINT64_MAX:
        raise ValueError(f"NEAR amount {near} does not fit into 64 bits")
    if near == 0:
        return ZERO_NEAR
    return Balance(near * YOCTO_PER_NEAR)


def yocto_to_near(yocto: int) -> int:
    """Convert yoctoNEAR into whole NEAR, dropping the fraction."""
    whole = int(yocto) // YOCTO_PER_NEAR
    if whole > UINT64_MAX:
        raise OverflowError(f"yocto div failed, remaining: {whole >> 64}")
    return whole


def _truncate(value: Fraction, precision: int = _FLOAT_PRECISION) -> Fraction:
    """Round to a binary mantissa of the given precision, towards zero."""
    if value == 0:
        return value
    sign = -1 if value < 0 else 1
    magnitude = abs(value)
    exponent = magnitude.numerator.bit_length() - magnitude.denominator.bit_length()
    if magnitude < Fraction(2) ** exponent:
        exponent -= 1
    shift = exponent - (precision - 1)
    mantissa = math.floor(magnitude / Fraction(2) ** shift)
    return sign * mantissa * Fraction(2) ** shift


def _scale_to_yocto(near: Fraction) -> Balance:
    scaled = _truncate(Fraction(YOCTO_PER_NEAR) * near)
    yocto = int(scaled)
    if yocto < 0:
        raise ValueError(f"negative amount {near} cannot be a balance")
    return Balance(yocto)


def balance_from_float(value: float) -> Balance:
    """Convert a NEAR amount given as a float into yoctoNEAR."""
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"cannot convert {value} to a balance")
    return _scale_to_yocto(Fraction(value))


def balance_from_string(text: str) -> Balance:
    """Convert a decimal NEAR amount such as '1.5' into yoctoNEAR."""
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"unable to parse '{text}'")
    return _scale_to_yocto(_truncate(Fraction(text)))