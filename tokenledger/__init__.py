"""
tokenledger — deterministic fungible-token ledger core.

An in-memory accounting structure (balances, allowances, total supply) and the
operations that mutate it: transfer, approve, transfer_from, mint, burn, with
optional burnable and capped-supply extensions. The host supplies the calling
account for each call and owns durability, ordering and event transport.

Quick start:

    from tokenledger import fixed_supply_preset
    gold = fixed_supply_preset("Gold", "GLD", 1000, b"alice", generate_events=True)
    gold.transfer(b"alice", b"bob", 200)
    gold.balance_of(b"bob")        # 200
"""

from __future__ import annotations

from .config import LedgerConfig, load_config
from .errors import (AllowanceExceeded, AllowanceUnderflow, AmountOverflow,
                     AmountUnderflow, CapExceeded, InsufficientBalance,
                     InvalidAmount, InvalidMetadata, LedgerCorrupted,
                     LedgerError, NullAccount, error_to_receipt_fields)
from .events import (Approval, EventSink, InMemoryEventSink, NullEventSink,
                     Transfer, encode_event, encode_events)
from .extensions import BurnableExtension, CapPolicy
from .hooks import BaseTransferHook, MintPolicy, TransferHook
from .interfaces import IERC20, IERC20Burnable
from .presets import FixedSupplyToken, capped_token, fixed_supply_preset
from .token import BurnableToken, CappedBurnableToken, CappedToken, Token
from .version import __version__

__all__ = [
    "__version__",
    # tokens
    "Token",
    "BurnableToken",
    "CappedToken",
    "CappedBurnableToken",
    "FixedSupplyToken",
    "fixed_supply_preset",
    "capped_token",
    "IERC20",
    "IERC20Burnable",
    # extension points
    "TransferHook",
    "BaseTransferHook",
    "MintPolicy",
    "CapPolicy",
    "BurnableExtension",
    # events
    "Transfer",
    "Approval",
    "EventSink",
    "InMemoryEventSink",
    "NullEventSink",
    "encode_event",
    "encode_events",
    # config
    "LedgerConfig",
    "load_config",
    # errors
    "LedgerError",
    "NullAccount",
    "InsufficientBalance",
    "AllowanceExceeded",
    "AllowanceUnderflow",
    "CapExceeded",
    "InvalidAmount",
    "AmountOverflow",
    "AmountUnderflow",
    "InvalidMetadata",
    "LedgerCorrupted",
    "error_to_receipt_fields",
]
