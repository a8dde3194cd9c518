"""
tokenledger.extensions — optional behaviours composed onto a token.

- capped.CapPolicy            maximum total supply (a MintPolicy)
- burnable.BurnableExtension  burn / burn_from
"""

from __future__ import annotations

from .burnable import BurnableExtension
from .capped import CapPolicy

__all__ = ["BurnableExtension", "CapPolicy"]
