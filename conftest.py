"""
Repository-wide pytest setup.

Ledger limits come from TOKENLEDGER_* environment variables (see
tokenledger.config). Tests assume the built-in defaults, so every test starts
with those variables unset and the cached config cleared.
"""
from __future__ import annotations

import os

import pytest

from tokenledger.config import load_config


@pytest.fixture(autouse=True)
def _default_ledger_env(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("TOKENLEDGER_"):
            monkeypatch.delenv(key, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()
