"""
tokenledger.state — in-memory ledger state and its write journal.

- core.LedgerCore            balances, total supply, metadata, atomic()
- allowances.AllowanceManager owner -> spender -> amount approvals
- journal.Journal            undo log with nested checkpoints
"""

from __future__ import annotations

from .allowances import AllowanceManager
from .core import LedgerCore
from .journal import Journal

__all__ = ["AllowanceManager", "LedgerCore", "Journal"]
