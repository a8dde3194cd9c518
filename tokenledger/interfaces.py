"""
tokenledger.interfaces — structural types hosts can program against.

IERC20 is the base fungible-token surface with the calling account passed
explicitly. Mutating calls return True on success and raise a LedgerError on
failure; they never return False.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IERC20(Protocol):
    def name(self) -> str: ...
    def symbol(self) -> str: ...
    def total_supply(self) -> int: ...
    def balance_of(self, account: Any) -> int: ...
    def allowance(self, owner: Any, spender: Any) -> int: ...
    def transfer(self, caller: Any, recipient: Any, amount: int) -> bool: ...
    def approve(self, caller: Any, spender: Any, amount: int) -> bool: ...
    def transfer_from(self, caller: Any, sender: Any, recipient: Any, amount: int) -> bool: ...


@runtime_checkable
class IERC20Burnable(IERC20, Protocol):
    def burn(self, caller: Any, amount: int) -> None: ...
    def burn_from(self, caller: Any, account: Any, amount: int) -> None: ...


__all__ = ["IERC20", "IERC20Burnable"]
