"""
tokenledger.supply — mint and burn.

SupplyController is not part of a token's public call surface. Presets and
extensions reach it through `token.supply` to create or destroy units.

mint(account, amount)
    policies -> before hook -> total supply rebound -> balance credited
    -> Transfer(None, account, amount) -> after hook

burn(account, amount)
    before hook -> balance check -> balance debited -> total supply rebound
    -> Transfer(account, None, amount) -> after hook
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Tuple

from .checks import require_account
from .errors import InsufficientBalance
from .hooks import HookChain, MintPolicy, check_policies
from .safe_uint import require_amount
from .state.core import LedgerCore

log = logging.getLogger(__name__)


class SupplyController:
    def __init__(self, ledger: LedgerCore, hooks: HookChain, policies: Iterable[MintPolicy] = ()) -> None:
        self._ledger = ledger
        self._hooks = hooks
        self._policies: Tuple[MintPolicy, ...] = check_policies(policies)

    @property
    def policies(self) -> Tuple[MintPolicy, ...]:
        return self._policies

    def mint(self, account: Any, amount: int) -> None:
        ledger = self._ledger
        with ledger.atomic("mint"):
            account = require_account(account, "account")
            require_amount(amount, ledger.max_amount)
            for policy in self._policies:
                policy.check_mint(ledger, account, amount)

            self._hooks.before(ledger, None, account, amount)
            ledger.increase_supply(amount)
            ledger.credit(account, amount)
            ledger.emitter.transfer(None, account, amount)
            self._hooks.after(ledger, None, account, amount)
        log.debug("minted %d (total_supply=%d)", amount, ledger.total_supply())

    def burn(self, account: Any, amount: int) -> None:
        ledger = self._ledger
        with ledger.atomic("burn"):
            account = require_account(account, "account")
            require_amount(amount, ledger.max_amount)

            self._hooks.before(ledger, account, None, amount)
            balance = ledger.balance_of(account)
            if balance < amount:
                raise InsufficientBalance("burn amount exceeds balance", balance=balance, amount=amount)
            ledger.debit(account, amount)
            ledger.decrease_supply(amount)
            ledger.emitter.transfer(account, None, amount)
            self._hooks.after(ledger, account, None, amount)
        log.debug("burned %d (total_supply=%d)", amount, ledger.total_supply())


__all__ = ["SupplyController"]
