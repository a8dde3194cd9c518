"""tokenledger.version — package version.

Resolution order:
  1) TOKENLEDGER_VERSION env var (exact value)
  2) Installed distribution metadata for 'tokenledger'
  3) BASE_VERSION + '+dev'
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata
from typing import Optional

# Bump when ledger semantics change (replay of recorded calls may differ).
BASE_VERSION = "0.1.0"


def _pkg_metadata_version(dist_name: str = "tokenledger") -> Optional[str]:
    try:
        v = importlib_metadata.version(dist_name)
        return v if v and v != "0.0.0" else None
    except importlib_metadata.PackageNotFoundError:
        return None


@lru_cache(maxsize=1)
def compute_version() -> str:
    val = os.getenv("TOKENLEDGER_VERSION")
    if val:
        return val
    meta_v = _pkg_metadata_version()
    if meta_v:
        return meta_v
    return f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
