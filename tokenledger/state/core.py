"""
tokenledger.state.core — canonical balances, total supply and metadata.

LedgerCore owns the state every other component reads and writes:

- balances: account -> amount (absent reads as zero, created on write)
- total supply: scalar, explicitly zero at construction
- metadata: name, symbol, events gate (fixed at construction)

It implements no token rules itself. Components call the write helpers here
(`credit`, `debit`, `increase_supply`, `decrease_supply`) so every write is
journaled and checked arithmetic is applied in one place, and they wrap each
public operation in :meth:`LedgerCore.atomic`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple

from ..checks import account_key, account_label, require_name, require_symbol
from ..config import LedgerConfig, resolve_config
from ..errors import LedgerCorrupted, LedgerError
from ..events import EventEmitter, EventSink
from ..safe_uint import amount_add, amount_sub, is_amount, require_amount
from .journal import Journal

log = logging.getLogger(__name__)


class LedgerCore:
    def __init__(
        self,
        name: str,
        symbol: str,
        events_enabled: bool = False,
        *,
        sink: Optional[EventSink] = None,
        config: Optional[LedgerConfig] = None,
    ) -> None:
        self._config = resolve_config(config)
        self._name = require_name(name, self._config.max_name_len)
        self._symbol = require_symbol(symbol, self._config.max_symbol_len)
        self._balances: Dict[Hashable, int] = {}
        self._total_supply: int = 0
        self._journal = Journal()
        self._emitter = EventEmitter(events_enabled, sink)

    # ------------------------------------------------------------------ #
    # Metadata & views
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def events_enabled(self) -> bool:
        return self._emitter.enabled

    @property
    def config(self) -> LedgerConfig:
        return self._config

    @property
    def max_amount(self) -> int:
        return self._config.max_amount

    @property
    def journal(self) -> Journal:
        return self._journal

    @property
    def emitter(self) -> EventEmitter:
        return self._emitter

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: Any) -> int:
        return self._balances.get(account_key(account), 0)

    def accounts(self) -> List[Hashable]:
        """Accounts with a balance entry, in stable label order."""
        return sorted(self._balances, key=account_label)

    def balances(self) -> Tuple[Tuple[Hashable, int], ...]:
        return tuple((a, self._balances[a]) for a in self.accounts())

    # ------------------------------------------------------------------ #
    # Atomic operations
    # ------------------------------------------------------------------ #

    @contextmanager
    def atomic(self, op: str) -> Iterator[None]:
        """
        Run the block as one all-or-nothing operation.

        On any exception every journaled write since entry is undone, events
        buffered since entry are dropped, and the exception propagates.
        """
        self._journal.begin()
        self._emitter.begin()
        try:
            yield
        except LedgerError as err:
            self._journal.revert()
            self._emitter.revert()
            log.debug("%s reverted: %s", op, err.code)
            raise
        except BaseException:
            self._journal.revert()
            self._emitter.revert()
            log.debug("%s reverted on unexpected error", op, exc_info=True)
            raise
        else:
            self._journal.commit()
            self._emitter.commit()
            if self._journal.depth() == 0:
                log.debug("%s committed (total_supply=%d)", op, self._total_supply)

    # ------------------------------------------------------------------ #
    # Write path
    # ------------------------------------------------------------------ #

    def set_balance(self, account: Hashable, amount: int) -> None:
        require_amount(amount, self.max_amount)
        self._journal.record_item(self._balances, account)
        self._balances[account] = amount

    def set_total_supply(self, amount: int) -> None:
        require_amount(amount, self.max_amount)
        self._journal.record_attr(self, "_total_supply")
        self._total_supply = amount

    def credit(self, account: Hashable, amount: int) -> int:
        new = amount_add(self.balance_of(account), amount, self.max_amount)
        self.set_balance(account, new)
        return new

    def debit(self, account: Hashable, amount: int) -> int:
        new = amount_sub(self.balance_of(account), amount, self.max_amount)
        self.set_balance(account, new)
        return new

    def increase_supply(self, amount: int) -> int:
        self.set_total_supply(amount_add(self._total_supply, amount, self.max_amount))
        return self._total_supply

    def decrease_supply(self, amount: int) -> int:
        self.set_total_supply(amount_sub(self._total_supply, amount, self.max_amount))
        return self._total_supply

    # ------------------------------------------------------------------ #
    # Invariants
    # ------------------------------------------------------------------ #

    def check_invariants(self) -> None:
        """
        Verify balances are valid amounts and sum to the total supply.
        Raises LedgerCorrupted with details on the first violation.
        """
        for account, bal in self._balances.items():
            if not is_amount(bal, self.max_amount):
                raise LedgerCorrupted(
                    "balance out of domain",
                    data={"account": account_label(account), "balance": repr(bal)},
                )
        total = sum(self._balances.values())
        if total != self._total_supply:
            raise LedgerCorrupted(
                "total supply does not match balances",
                data={"total_supply": self._total_supply, "sum_balances": total},
            )


__all__ = ["LedgerCore"]
