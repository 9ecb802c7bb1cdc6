"""
Balance accumulation helpers.

A balance mapping is a plain dict of ``{address: amount}``. Adapters never
mutate a shared mapping; they produce ``(address, amount)`` contributions and
``fold_balances`` reduces them into a fresh dict.

Amounts may arrive as:
- int      raw uint256 values straight from a contract call
- str      raw uint256 values serialised as decimal strings
- Decimal  fixed-point values
- float    rescaled, display-rounded values (see ``rescale``)
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, Iterable, Tuple, Union

Amount = Union[int, float, Decimal, str]

# uint256 has 78 digits; keep enough precision for exact rescaling
_PRECISION = 100


def _coerce(amount: Amount) -> Union[int, float, Decimal]:
    if isinstance(amount, str):
        text = amount.strip()
        if text.isdecimal():
            return int(text)
        return Decimal(text)
    return amount


def sum_single_balance(balances: Dict[str, Union[int, float, Decimal]], key: str, amount: Amount):
    """
    Add ``amount`` to ``balances[key]``, inserting the key if absent.

    int + int stays an exact int, Decimal + int stays Decimal, and any float
    operand turns the entry into a float.
    """
    amount = _coerce(amount)
    if key not in balances:
        balances[key] = amount
        return balances

    current = balances[key]
    if isinstance(current, float) or isinstance(amount, float):
        balances[key] = float(current) + float(amount)
    else:
        balances[key] = current + amount
    return balances


def fold_balances(contributions: Iterable[Tuple[str, Amount]]) -> Dict[str, Union[int, float, Decimal]]:
    """Reduce ``(key, amount)`` pairs into a new balance mapping."""
    balances: Dict[str, Union[int, float, Decimal]] = {}
    for key, amount in contributions:
        sum_single_balance(balances, key, amount)
    return balances


def to_fixed(raw: Amount, decimals: int, places: int = 4) -> str:
    """
    Format ``raw / 10**decimals`` with exactly ``places`` decimals.

    Rounds half-up on the exact decimal value, never on a binary float.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        value = Decimal(_coerce(raw)).scaleb(-int(decimals))
        quantum = Decimal(1).scaleb(-places)
        return str(value.quantize(quantum, rounding=ROUND_HALF_UP))


def rescale(raw: Amount, decimals: int, places: int = 4) -> float:
    """Rescale a raw token amount to display units, rounded to ``places``."""
    return float(to_fixed(raw, decimals, places))
