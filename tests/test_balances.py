from decimal import Decimal, InvalidOperation
import itertools

import pytest

from genius.balances import fold_balances, rescale, sum_single_balance, to_fixed


def test_sum_single_balance_inserts_then_adds():
    balances = {}
    sum_single_balance(balances, "0xabc", 5)
    sum_single_balance(balances, "0xabc", 7)
    assert balances == {"0xabc": 12}
    assert isinstance(balances["0xabc"], int)


def test_sum_single_balance_mixes_float_and_int():
    balances = {"0xabc": 2}
    sum_single_balance(balances, "0xabc", 0.5)
    assert balances == {"0xabc": 2.5}
    assert isinstance(balances["0xabc"], float)


def test_sum_single_balance_accepts_numeric_strings():
    balances = {}
    sum_single_balance(balances, "0xabc", "100000000000000000000000000000")
    sum_single_balance(balances, "0xabc", 1)
    assert balances["0xabc"] == 100000000000000000000000000001


def test_sum_single_balance_keeps_decimal_exact():
    balances = {"0xabc": Decimal("0.1")}
    sum_single_balance(balances, "0xabc", Decimal("0.2"))
    sum_single_balance(balances, "0xabc", 1)
    assert balances["0xabc"] == Decimal("1.3")


def test_fold_balances_returns_fresh_mapping():
    first = fold_balances([("a", 1), ("b", 2), ("a", 3)])
    second = fold_balances([("a", 1)])
    assert first == {"a": 4, "b": 2}
    assert second == {"a": 1}


def test_fold_balances_is_order_independent():
    contributions = [("a", 1.5), ("a", 2.25), ("a", 0.125), ("b", 3)]
    results = {
        tuple(sorted(fold_balances(order).items()))
        for order in itertools.permutations(contributions)
    }
    assert len(results) == 1


def test_fold_balances_empty():
    assert fold_balances([]) == {}


@pytest.mark.parametrize(
    "raw, decimals, expected",
    [
        (2500000000000000000, 18, "2.5000"),
        (0, 18, "0.0000"),
        (123456789, 6, "123.4568"),
        (123456749, 6, "123.4567"),
        # exact half rounds up
        (50000000000000, 18, "0.0001"),
        (49999999999999, 18, "0.0000"),
        (10 ** 77, 18, "1" + "0" * 59 + ".0000"),
    ],
)
def test_to_fixed(raw, decimals, expected):
    assert to_fixed(raw, decimals) == expected


def test_to_fixed_does_not_round_through_binary_float():
    # 1.00005 is not representable as a float; fixed-point half-up gives 1.0001
    assert to_fixed(100005, 5) == "1.0001"
    assert rescale(100005, 5) == 1.0001


def test_rescale_returns_float():
    assert rescale(2500000000000000000, 18) == 2.5
    assert isinstance(rescale(0, 18), float)


def test_sum_single_balance_rejects_non_decimal_digit_strings():
    # "²" is a digit but not a decimal character; it must not reach int()
    with pytest.raises(InvalidOperation):
        sum_single_balance({}, "0xabc", "²")
