"""
tokenledger.transfers — balance movements between two set accounts.

transfer(caller, recipient, amount)
    caller is the implicit sender.

transfer_from(caller, sender, recipient, amount)
    caller spends the allowance `sender` granted it: `sender` is debited,
    `recipient` credited, and allowance(sender, caller) reduced by `amount`
    through the approve overwrite path. Emits Transfer then Approval.

All precondition checks run before the first write; anything that still fails
later (a hook, checked arithmetic) is undone by LedgerCore.atomic().
"""

from __future__ import annotations

from typing import Any, Hashable

from .checks import require_account
from .errors import AllowanceExceeded, InsufficientBalance
from .hooks import HookChain
from .safe_uint import require_amount
from .state.allowances import AllowanceManager
from .state.core import LedgerCore


class TransferEngine:
    def __init__(self, ledger: LedgerCore, allowances: AllowanceManager, hooks: HookChain) -> None:
        self._ledger = ledger
        self._allowances = allowances
        self._hooks = hooks

    def transfer(self, caller: Any, recipient: Any, amount: int) -> None:
        with self._ledger.atomic("transfer"):
            sender = require_account(caller, "sender")
            recipient = require_account(recipient, "recipient")
            require_amount(amount, self._ledger.max_amount)
            self.move(sender, recipient, amount)

    def transfer_from(self, caller: Any, sender: Any, recipient: Any, amount: int) -> None:
        with self._ledger.atomic("transfer_from"):
            spender = require_account(caller, "spender")
            sender = require_account(sender, "sender")
            recipient = require_account(recipient, "recipient")
            require_amount(amount, self._ledger.max_amount)

            current = self._allowances.allowance(sender, spender)
            if current < amount:
                raise AllowanceExceeded(allowance=current, amount=amount)

            self.move(sender, recipient, amount)
            self._allowances.spend_allowance(sender, spender, amount)

    def move(self, sender: Hashable, recipient: Hashable, amount: int) -> None:
        """
        Debit `sender`, credit `recipient`, emit Transfer. Expects validated
        arguments and an open atomic block.
        """
        ledger = self._ledger
        self._hooks.before(ledger, sender, recipient, amount)

        balance = ledger.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(balance=balance, amount=amount)

        # Debit first and re-read on credit so a self-transfer nets to zero.
        ledger.debit(sender, amount)
        ledger.credit(recipient, amount)

        ledger.emitter.transfer(sender, recipient, amount)
        self._hooks.after(ledger, sender, recipient, amount)


__all__ = ["TransferEngine"]
