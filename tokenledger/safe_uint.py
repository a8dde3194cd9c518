"""
tokenledger.safe_uint
=====================

Checked unsigned-integer helpers for token amounts.

Goals
-----
- Amounts are plain Python ``int`` values (immutable, arbitrary precision)
  constrained to the closed interval [0, max_amount].
- Two styles of safety:
  1) **Checked**: raise on overflow/underflow or out-of-domain input.
  2) **try_***: return ``None`` instead of raising, for pre-checks.
- Integer-only, no floats, no wrapping.

``max_amount`` defaults to U256_MAX; ledgers pass their configured ceiling.
"""

from __future__ import annotations

from typing import Any, Final, Optional

from .errors import AmountOverflow, AmountUnderflow, InvalidAmount

U256_MAX: Final[int] = (1 << 256) - 1


# ---------------------------------------------------------------------------
# Domain guards
# ---------------------------------------------------------------------------

def is_amount(n: Any, max_amount: int = U256_MAX) -> bool:
    """True iff `n` is an int (not bool) in [0, max_amount]."""
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= max_amount


def require_amount(n: Any, max_amount: int = U256_MAX) -> int:
    """Return `n` unchanged if it is a valid amount, else raise InvalidAmount."""
    if not is_amount(n, max_amount):
        raise InvalidAmount(
            "amount must be an integer in [0, max_amount]",
            data={"value": repr(n), "max_bits": max_amount.bit_length()},
        )
    return n


# ---------------------------------------------------------------------------
# Checked (fail-fast)
# ---------------------------------------------------------------------------

def amount_add(x: int, y: int, max_amount: int = U256_MAX) -> int:
    """Checked add: raise AmountOverflow above max_amount."""
    require_amount(x, max_amount)
    require_amount(y, max_amount)
    s = x + y
    if s > max_amount:
        raise AmountOverflow(data={"x": x, "y": y})
    return s


def amount_sub(x: int, y: int, max_amount: int = U256_MAX) -> int:
    """Checked sub: raise AmountUnderflow when y > x."""
    require_amount(x, max_amount)
    require_amount(y, max_amount)
    if y > x:
        raise AmountUnderflow(data={"x": x, "y": y})
    return x - y


def amount_cmp(x: int, y: int) -> int:
    """Three-way compare: -1, 0 or 1."""
    return (x > y) - (x < y)


# ---------------------------------------------------------------------------
# "try_*" convenience (no raise; return Optional[int])
# ---------------------------------------------------------------------------

def try_add(x: int, y: int, max_amount: int = U256_MAX) -> Optional[int]:
    """Return x+y or None on overflow/out-of-domain."""
    if not (is_amount(x, max_amount) and is_amount(y, max_amount)):
        return None
    s = x + y
    return s if s <= max_amount else None


def try_sub(x: int, y: int, max_amount: int = U256_MAX) -> Optional[int]:
    """Return x-y or None on underflow/out-of-domain."""
    if not (is_amount(x, max_amount) and is_amount(y, max_amount)):
        return None
    return x - y if x >= y else None


__all__ = [
    "U256_MAX",
    "is_amount",
    "require_amount",
    "amount_add",
    "amount_sub",
    "amount_cmp",
    "try_add",
    "try_sub",
]
