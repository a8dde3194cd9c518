"""
Holder-initiated burns.

burn(caller, amount)
    destroys `amount` of the caller's own tokens.

burn_from(caller, account, amount)
    destroys `amount` of `account`'s tokens, spending the allowance `account`
    granted to `caller`. Emits Approval (new allowance) then Transfer to None.
"""

from __future__ import annotations

from typing import Any

from ..checks import require_account
from ..safe_uint import require_amount
from ..state.allowances import AllowanceManager
from ..state.core import LedgerCore
from ..supply import SupplyController


class BurnableExtension:
    def __init__(self, ledger: LedgerCore, allowances: AllowanceManager, supply: SupplyController) -> None:
        self._ledger = ledger
        self._allowances = allowances
        self._supply = supply

    def burn(self, caller: Any, amount: int) -> None:
        self._supply.burn(caller, amount)

    def burn_from(self, caller: Any, account: Any, amount: int) -> None:
        with self._ledger.atomic("burn_from"):
            spender = require_account(caller, "spender")
            account = require_account(account, "account")
            require_amount(amount, self._ledger.max_amount)
            self._allowances.spend_allowance(account, spender, amount)
            self._supply.burn(account, amount)


__all__ = ["BurnableExtension"]
