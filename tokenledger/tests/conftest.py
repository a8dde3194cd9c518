# -*- coding: utf-8 -*-
"""
tokenledger.tests.conftest
==========================

Shared fixtures for the ledger unit tests.

- Deterministic 20-byte account addresses derived from a tag via SHA3, so
  tests read like the host would drive the ledger (raw bytes identities).
- Ready-made tokens: the "Gold"/"GLD" fixed-supply preset with events on, and
  a capped token.
- A recording TransferHook for asserting hook order and arguments.
"""
from __future__ import annotations

import hashlib
import os
from typing import Dict, List, Tuple

import pytest

from tokenledger import BaseTransferHook, capped_token, fixed_supply_preset

# Keep dict/set hash-iteration stable.
os.environ.setdefault("PYTHONHASHSEED", "0")


def det_address(tag: str) -> bytes:
    """Stable 20-byte address from a tag."""
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:20]


@pytest.fixture(scope="session")
def accounts() -> Dict[str, bytes]:
    return {tag: det_address(tag) for tag in ("alice", "bob", "carol", "dave", "erin")}


@pytest.fixture
def alice(accounts) -> bytes:
    return accounts["alice"]


@pytest.fixture
def bob(accounts) -> bytes:
    return accounts["bob"]


@pytest.fixture
def carol(accounts) -> bytes:
    return accounts["carol"]


@pytest.fixture
def dave(accounts) -> bytes:
    return accounts["dave"]


@pytest.fixture
def gold(alice):
    """Fixed supply of 1000 GLD minted to alice, events enabled."""
    return fixed_supply_preset("Gold", "GLD", 1000, alice, generate_events=True)


@pytest.fixture
def capped():
    return capped_token("Capped", "CAP", 1000, generate_events=True, burnable=True)


class RecordingHook(BaseTransferHook):
    def __init__(self, name: str = "hook", log: List[Tuple] = None) -> None:
        self.name = name
        self.calls: List[Tuple] = log if log is not None else []

    def before_transfer(self, ledger, from_, to, amount) -> None:
        self.calls.append((self.name, "before", from_, to, amount))

    def after_transfer(self, ledger, from_, to, amount) -> None:
        self.calls.append((self.name, "after", from_, to, amount))


@pytest.fixture
def recording_hook() -> RecordingHook:
    return RecordingHook()


def snapshot(token, accts) -> Tuple:
    """Observable state over a set of accounts: supply, balances, allowances."""
    balances = tuple(token.balance_of(a) for a in accts)
    allowances = tuple(token.allowance(o, s) for o in accts for s in accts)
    return token.total_supply(), balances, allowances, len(token.events)
