"""
tokenledger.hooks — extension points invoked at fixed points of every movement.

Two capability interfaces:

- TransferHook: `before_transfer` / `after_transfer`, called for ordinary
  transfers, mints and burns alike. For a mint `from_` is None, for a burn
  `to` is None, never both.
- MintPolicy: `check_mint`, consulted before a mint touches any state; raise a
  LedgerError to reject it (see extensions.capped.CapPolicy).

Hooks are supplied as ordered sequences at token construction and run in that
order. A hook that raises aborts the whole operation; the journal undoes
anything already written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Iterable, Optional, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from .state.core import LedgerCore


@runtime_checkable
class TransferHook(Protocol):
    def before_transfer(
        self, ledger: "LedgerCore", from_: Optional[Hashable], to: Optional[Hashable], amount: int
    ) -> None: ...

    def after_transfer(
        self, ledger: "LedgerCore", from_: Optional[Hashable], to: Optional[Hashable], amount: int
    ) -> None: ...


@runtime_checkable
class MintPolicy(Protocol):
    def check_mint(self, ledger: "LedgerCore", account: Hashable, amount: int) -> None: ...


class BaseTransferHook:
    """No-op TransferHook; subclass and override only what you need."""

    def before_transfer(self, ledger, from_, to, amount) -> None:
        return None

    def after_transfer(self, ledger, from_, to, amount) -> None:
        return None


class HookChain:
    """Ordered TransferHook dispatcher."""

    def __init__(self, hooks: Iterable[TransferHook] = ()) -> None:
        self._hooks: Tuple[TransferHook, ...] = tuple(hooks)
        for h in self._hooks:
            if not isinstance(h, TransferHook):
                raise TypeError(f"{type(h).__name__} does not implement TransferHook")

    def __len__(self) -> int:
        return len(self._hooks)

    @property
    def hooks(self) -> Tuple[TransferHook, ...]:
        return self._hooks

    def before(self, ledger: "LedgerCore", from_: Optional[Hashable], to: Optional[Hashable], amount: int) -> None:
        if from_ is None and to is None:
            raise ValueError("hook invoked with both from_ and to unset")
        for h in self._hooks:
            h.before_transfer(ledger, from_, to, amount)

    def after(self, ledger: "LedgerCore", from_: Optional[Hashable], to: Optional[Hashable], amount: int) -> None:
        for h in self._hooks:
            h.after_transfer(ledger, from_, to, amount)


def check_policies(policies: Iterable[MintPolicy]) -> Tuple[MintPolicy, ...]:
    out = tuple(policies)
    for p in out:
        if not isinstance(p, MintPolicy):
            raise TypeError(f"{type(p).__name__} does not implement MintPolicy")
    return out


__all__ = ["TransferHook", "MintPolicy", "BaseTransferHook", "HookChain", "check_policies"]
