# -*- coding: utf-8 -*-
"""
tokenledger.checks
==================

Deterministic validation helpers shared by the ledger components: account
presence and token metadata. Nothing here touches ledger state.

Accounts are opaque to the ledger. Any hashable, equality-comparable value the
host hands in is accepted (raw ``bytes`` addresses, ``str`` principals, ...).
``None`` and empty ``bytes``/``str`` are the null identity and are rejected in
every mutating call.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional

from .errors import InvalidMetadata, NullAccount


def is_null_account(account: Any) -> bool:
    """True for the unset identity: None, b"", or ""."""
    if account is None:
        return True
    if isinstance(account, (bytes, bytearray, str)) and len(account) == 0:
        return True
    return False


def require_account(account: Any, role: str = "account") -> Hashable:
    """
    Ensure `account` is set. `role` is reported in the error for diagnostics.
    bytearray identities are frozen to bytes so they can key the maps.
    """
    if is_null_account(account):
        raise NullAccount(f"{role} is the null account", role=role)
    if isinstance(account, bytearray):
        return bytes(account)
    return account


def account_key(account: Any) -> Optional[Hashable]:
    """
    Map key for a read. bytearray is frozen like on the write path; values
    that cannot key a map read as the null account.
    """
    if isinstance(account, bytearray):
        return bytes(account)
    try:
        hash(account)
    except TypeError:
        return None
    return account


def _is_printable(s: str) -> bool:
    return all(ch.isprintable() for ch in s)


def require_name(name: Any, max_len: int) -> str:
    """Name must be 1..max_len printable characters."""
    if not isinstance(name, str) or not (1 <= len(name) <= max_len) or not _is_printable(name):
        raise InvalidMetadata(f"name must be 1..{max_len} printable characters", field_name="name")
    return name


def require_symbol(symbol: Any, max_len: int) -> str:
    """Symbol must be 1..max_len printable characters without whitespace."""
    if (
        not isinstance(symbol, str)
        or not (1 <= len(symbol) <= max_len)
        or not _is_printable(symbol)
        or any(ch.isspace() for ch in symbol)
    ):
        raise InvalidMetadata(
            f"symbol must be 1..{max_len} printable characters", field_name="symbol"
        )
    return symbol


def account_label(account: Optional[Hashable]) -> str:
    """Stable printable form of an account for logs and CLI output."""
    if account is None:
        return "-"
    if isinstance(account, (bytes, bytearray)):
        return "0x" + bytes(account).hex()
    return str(account)


__all__ = [
    "is_null_account",
    "require_account",
    "account_key",
    "require_name",
    "require_symbol",
    "account_label",
]
