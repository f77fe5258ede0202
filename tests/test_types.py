import random

import pytest

from nearapi.types import (
    Balance,
    balance_from_float,
    balance_from_string,
    near_to_yocto,
    yocto_to_near,
)


def test_near_to_yocto_round_trip():
    near = 10
    assert yocto_to_near(near_to_yocto(near)) == near


def test_near_to_yocto_fuzz():
    rng = random.Random(1234)
    for _ in range(1000):
        value = rng.randrange(0, 2**16)
        assert yocto_to_near(near_to_yocto(value)) == value


def test_one_near_is_ten_to_24_yocto():
    assert near_to_yocto(1) == 10**24


def test_near_to_yocto_zero():
    assert near_to_yocto(0) == Balance(0)


def test_near_to_yocto_rejects_negative():
    with pytest.raises(ValueError):
        near_to_yocto(-1)


def test_balance_range_checked():
    with pytest.raises(ValueError):
        Balance(-1)
    with pytest.raises(ValueError):
        Balance(2**128)
    assert Balance(2**128 - 1) == 2**128 - 1


def test_balance_json_round_trip():
    balance = near_to_yocto(7)
    text = balance.to_json()
    assert text == str(7 * 10**24)
    assert Balance.from_json(text) == balance


@pytest.mark.parametrize("bad", ["abc", "1.5", "", "12a"])
def test_balance_from_json_rejects_garbage(bad):
    with pytest.raises(ValueError):
        Balance.from_json(bad)


def test_balance_from_json_requires_string():
    with pytest.raises(TypeError):
        Balance.from_json(5)


def test_balance_div():
    assert near_to_yocto(10).div(5) == near_to_yocto(2)
    assert isinstance(near_to_yocto(10).div(5), Balance)


def test_balance_str_is_decimal():
    assert str(Balance(42)) == "42"


def test_balance_from_string_whole():
    assert balance_from_string("1") == near_to_yocto(1)


def test_balance_from_string_fraction():
    assert balance_from_string("1.5") == near_to_yocto(3).div(2)
    assert balance_from_string("0.5") == near_to_yocto(1).div(2)


def test_balance_from_string_never_exceeds_exact_value():
    assert balance_from_string("0.1") <= near_to_yocto(1).div(10)


@pytest.mark.parametrize("bad", ["abc", "", "1..2", "-1"])
def test_balance_from_string_rejects(bad):
    with pytest.raises(ValueError):
        balance_from_string(bad)


def test_balance_from_float():
    assert balance_from_float(2.0) == near_to_yocto(2)
    assert balance_from_float(0.25) == near_to_yocto(1).div(4)


def test_balance_from_float_rejects_nan():
    with pytest.raises(ValueError):
        balance_from_float(float("nan"))