"""
tokenledger.state.allowances — owner -> spender -> amount spending approvals.

Reads never create entries: `allowance()` on an unknown owner or spender is
zero and leaves the nested map untouched. The inner map for an owner is only
created on the write path, and that creation is journaled like any other write
so a reverted operation removes it again.

All allowance changes go through `_write()`, which is the approve overwrite
path: approve, increase/decrease and the spends made by transfer_from and
burn_from all end there and all emit Approval with the resulting value.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Tuple

from ..checks import account_key, account_label, require_account
from ..errors import AllowanceExceeded, AllowanceUnderflow
from ..safe_uint import amount_add, require_amount
from .core import LedgerCore


class AllowanceManager:
    def __init__(self, ledger: LedgerCore) -> None:
        self._ledger = ledger
        self._allowances: Dict[Hashable, Dict[Hashable, int]] = {}

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #

    def allowance(self, owner: Any, spender: Any) -> int:
        inner = self._allowances.get(account_key(owner))
        if inner is None:
            return 0
        return inner.get(account_key(spender), 0)

    def entries(self) -> List[Tuple[Hashable, Hashable, int]]:
        """All stored (owner, spender, amount) triples in stable order."""
        out = [
            (owner, spender, amount)
            for owner, inner in self._allowances.items()
            for spender, amount in inner.items()
        ]
        out.sort(key=lambda t: (account_label(t[0]), account_label(t[1])))
        return out

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def approve(self, owner: Any, spender: Any, amount: int) -> None:
        with self._ledger.atomic("approve"):
            owner = require_account(owner, "owner")
            spender = require_account(spender, "spender")
            require_amount(amount, self._ledger.max_amount)
            self._write(owner, spender, amount)

    def increase_allowance(self, owner: Any, spender: Any, added_value: int) -> int:
        with self._ledger.atomic("increase_allowance"):
            owner = require_account(owner, "owner")
            spender = require_account(spender, "spender")
            new = amount_add(self.allowance(owner, spender), added_value, self._ledger.max_amount)
            self._write(owner, spender, new)
        return new

    def decrease_allowance(self, owner: Any, spender: Any, subtracted_value: int) -> int:
        with self._ledger.atomic("decrease_allowance"):
            owner = require_account(owner, "owner")
            spender = require_account(spender, "spender")
            require_amount(subtracted_value, self._ledger.max_amount)
            current = self.allowance(owner, spender)
            if current < subtracted_value:
                raise AllowanceUnderflow(allowance=current, amount=subtracted_value)
            new = current - subtracted_value
            self._write(owner, spender, new)
        return new

    def spend_allowance(self, owner: Hashable, spender: Hashable, amount: int) -> int:
        """
        Consume `amount` of the allowance `owner` granted to `spender`.
        Callers validate the accounts and amount; raises AllowanceExceeded.
        """
        current = self.allowance(owner, spender)
        if current < amount:
            raise AllowanceExceeded(allowance=current, amount=amount)
        new = current - amount
        self._write(owner, spender, new)
        return new

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _write(self, owner: Hashable, spender: Hashable, amount: int) -> None:
        journal = self._ledger.journal
        inner = self._allowances.get(owner)
        if inner is None:
            journal.record_item(self._allowances, owner)
            inner = {}
            self._allowances[owner] = inner
        journal.record_item(inner, spender)
        inner[spender] = amount
        self._ledger.emitter.approval(owner, spender, amount)


__all__ = ["AllowanceManager"]
