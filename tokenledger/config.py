"""
tokenledger.config — numeric ceilings and metadata limits for token ledgers.

Configuration precedence:
  1) Explicit ``LedgerConfig`` passed to a token constructor
  2) Environment variables (TOKENLEDGER_*)
  3) Hardcoded safe defaults below

Env vars:
  - TOKENLEDGER_AMOUNT_BITS      (int)   default: 256   range [8, 4096]
  - TOKENLEDGER_MAX_NAME_LEN     (int)   default: 64    range [1, 1024]
  - TOKENLEDGER_MAX_SYMBOL_LEN   (int)   default: 11    range [1, 256]
  - TOKENLEDGER_EVENTS_DEFAULT   (bool)  default: false (CLI default only)

Usage:
    from tokenledger.config import load_config
    cfg = load_config()
    cfg.max_amount  # 2**256 - 1 by default
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional


_BOOL_TRUE = {"1", "true", "t", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "f", "no", "n", "off"}


# ----------------------------- helpers ---------------------------------------


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in _BOOL_TRUE:
        return True
    if val in _BOOL_FALSE:
        return False
    return default


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class LedgerConfig:
    # Width of the Amount domain; results above 2**amount_bits - 1 overflow.
    amount_bits: int = 256

    # Metadata limits (characters)
    max_name_len: int = 64
    max_symbol_len: int = 11

    # Default for generate_events when a host (the CLI) does not say otherwise
    events_default: bool = False

    @property
    def max_amount(self) -> int:
        return (1 << self.amount_bits) - 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "amount_bits": self.amount_bits,
            "max_amount": self.max_amount,
            "max_name_len": self.max_name_len,
            "max_symbol_len": self.max_symbol_len,
            "events_default": self.events_default,
        }


@lru_cache(maxsize=1)
def load_config() -> LedgerConfig:
    """
    Build and cache a LedgerConfig from environment + safe defaults.
    """
    return LedgerConfig(
        amount_bits=_env_int("TOKENLEDGER_AMOUNT_BITS", 256, min_v=8, max_v=4096),
        max_name_len=_env_int("TOKENLEDGER_MAX_NAME_LEN", 64, min_v=1, max_v=1024),
        max_symbol_len=_env_int("TOKENLEDGER_MAX_SYMBOL_LEN", 11, min_v=1, max_v=256),
        events_default=_env_bool("TOKENLEDGER_EVENTS_DEFAULT", False),
    )


def resolve_config(cfg: Optional[LedgerConfig] = None) -> LedgerConfig:
    """Return `cfg` if given, else the cached environment config."""
    return cfg if cfg is not None else load_config()


__all__ = ["LedgerConfig", "load_config", "resolve_config"]
