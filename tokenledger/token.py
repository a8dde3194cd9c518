# -*- coding: utf-8 -*-
"""
ERC-20-like fungible token
==========================

Deterministic, float-free token ledger composed from the state, transfer and
supply components. The calling account is an explicit first argument of every
mutating call (no ambient msg.sender); authenticating it is the host's job.

Public interface
----------------
# metadata & views
name() -> str
symbol() -> str
total_supply() -> int
balance_of(account) -> int
allowance(owner, spender) -> int

# state-changing (explicit caller)
transfer(caller, recipient, amount) -> bool
approve(caller, spender, amount) -> bool
transfer_from(caller, sender, recipient, amount) -> bool
increase_allowance(caller, spender, added_value) -> bool
decrease_allowance(caller, spender, subtracted_value) -> bool

# BurnableToken only
burn(caller, amount) -> None
burn_from(caller, account, amount) -> None

# CappedToken / CappedBurnableToken only
cap() -> int

Notes
-----
- Minting is not a public call. Presets and extensions use `token.supply`.
- Events are recorded only when `generate_events=True` at construction.
- Every mutating call is atomic: on failure no balance, allowance or supply
  changes and no event is emitted.
"""

from __future__ import annotations

from typing import Any, ContextManager, Hashable, Iterable, List, Optional, Tuple

from .config import LedgerConfig
from .errors import InvalidMetadata
from .events import EventSink, InMemoryEventSink, LedgerEvent
from .extensions.burnable import BurnableExtension
from .extensions.capped import CapPolicy
from .hooks import HookChain, MintPolicy, TransferHook
from .state.allowances import AllowanceManager
from .state.core import LedgerCore
from .supply import SupplyController
from .transfers import TransferEngine


class Token:
    def __init__(
        self,
        name: str,
        symbol: str,
        generate_events: bool = False,
        *,
        hooks: Iterable[TransferHook] = (),
        mint_policies: Iterable[MintPolicy] = (),
        sink: Optional[EventSink] = None,
        config: Optional[LedgerConfig] = None,
    ) -> None:
        self._ledger = LedgerCore(name, symbol, generate_events, sink=sink, config=config)
        self._hooks = HookChain(hooks)
        self._allowances = AllowanceManager(self._ledger)
        self._transfers = TransferEngine(self._ledger, self._allowances, self._hooks)
        self.supply = SupplyController(self._ledger, self._hooks, mint_policies)
        for policy in self.supply.policies:
            if isinstance(policy, CapPolicy) and policy.cap > self._ledger.max_amount:
                raise InvalidMetadata(
                    "cap exceeds the ledger's maximum amount",
                    field_name="cap",
                    data={"cap": policy.cap, "max_amount": self._ledger.max_amount},
                )

    # ------------------------------------------------------------------ #
    # Metadata & views
    # ------------------------------------------------------------------ #

    def name(self) -> str:
        return self._ledger.name

    def symbol(self) -> str:
        return self._ledger.symbol

    def total_supply(self) -> int:
        return self._ledger.total_supply()

    def balance_of(self, account: Any) -> int:
        return self._ledger.balance_of(account)

    def allowance(self, owner: Any, spender: Any) -> int:
        return self._allowances.allowance(owner, spender)

    @property
    def ledger(self) -> LedgerCore:
        return self._ledger

    @property
    def events_enabled(self) -> bool:
        return self._ledger.events_enabled

    @property
    def events(self) -> Tuple[LedgerEvent, ...]:
        """Committed records when the default in-memory sink is in use."""
        sink = self._ledger.emitter.sink
        if isinstance(sink, InMemoryEventSink):
            return sink.events()
        return ()

    def allowance_entries(self) -> List[Tuple[Hashable, Hashable, int]]:
        return self._allowances.entries()

    def atomic(self, op: str = "batch") -> ContextManager[None]:
        """
        Group several calls into one all-or-nothing unit. If the block raises,
        every call made inside it is undone and none of their events are
        delivered.
        """
        return self._ledger.atomic(op)

    # ------------------------------------------------------------------ #
    # Mutations (explicit caller)
    # ------------------------------------------------------------------ #

    def transfer(self, caller: Any, recipient: Any, amount: int) -> bool:
        self._transfers.transfer(caller, recipient, amount)
        return True

    def approve(self, caller: Any, spender: Any, amount: int) -> bool:
        self._allowances.approve(caller, spender, amount)
        return True

    def transfer_from(self, caller: Any, sender: Any, recipient: Any, amount: int) -> bool:
        self._transfers.transfer_from(caller, sender, recipient, amount)
        return True

    def increase_allowance(self, caller: Any, spender: Any, added_value: int) -> bool:
        self._allowances.increase_allowance(caller, spender, added_value)
        return True

    def decrease_allowance(self, caller: Any, spender: Any, subtracted_value: int) -> bool:
        self._allowances.decrease_allowance(caller, spender, subtracted_value)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name()!r}, symbol={self.symbol()!r}, total_supply={self.total_supply()})"


class BurnableToken(Token):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._burnable = BurnableExtension(self._ledger, self._allowances, self.supply)

    def burn(self, caller: Any, amount: int) -> None:
        self._burnable.burn(caller, amount)

    def burn_from(self, caller: Any, account: Any, amount: int) -> None:
        self._burnable.burn_from(caller, account, amount)


class CappedToken(Token):
    """Token whose supply is bounded by a CapPolicy installed ahead of any other mint policy."""

    def __init__(
        self,
        name: str,
        symbol: str,
        cap: int,
        generate_events: bool = False,
        *,
        mint_policies: Iterable[MintPolicy] = (),
        **kwargs: Any,
    ) -> None:
        self._cap_policy = CapPolicy(cap)
        policies = (self._cap_policy,) + tuple(mint_policies)
        super().__init__(name, symbol, generate_events, mint_policies=policies, **kwargs)

    def cap(self) -> int:
        return self._cap_policy.cap


class CappedBurnableToken(CappedToken, BurnableToken):
    pass


__all__ = ["Token", "BurnableToken", "CappedToken", "CappedBurnableToken"]
