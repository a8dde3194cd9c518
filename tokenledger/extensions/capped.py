"""
Supply cap for mintable tokens.

CapPolicy is a MintPolicy: installed on a token it rejects any mint that would
take the total supply above `cap`. Reaching the cap exactly is allowed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable

from ..errors import CapExceeded, InvalidMetadata
from ..safe_uint import is_amount, try_add

if TYPE_CHECKING:  # pragma: no cover
    from ..state.core import LedgerCore


class CapPolicy:
    def __init__(self, cap: int) -> None:
        if not is_amount(cap) or cap == 0:
            raise InvalidMetadata("cap must be a positive amount", field_name="cap")
        self._cap = cap

    @property
    def cap(self) -> int:
        return self._cap

    def check_mint(self, ledger: "LedgerCore", account: Hashable, amount: int) -> None:
        total = ledger.total_supply()
        new_total = try_add(total, amount, ledger.max_amount)
        if new_total is None or new_total > self._cap:
            raise CapExceeded(cap=self._cap, total_supply=total, amount=amount)

    def __repr__(self) -> str:
        return f"CapPolicy(cap={self._cap})"


__all__ = ["CapPolicy"]
