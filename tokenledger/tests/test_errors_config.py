# -*- coding: utf-8 -*-
from __future__ import annotations

import dataclasses
import re
from pathlib import Path

import pytest

from tokenledger import (AllowanceExceeded, CapExceeded, InsufficientBalance,
                         LedgerConfig, LedgerCorrupted, LedgerError,
                         NullAccount, error_to_receipt_fields, load_config)
from tokenledger.config import resolve_config

ENV_KEYS = (
    "TOKENLEDGER_AMOUNT_BITS",
    "TOKENLEDGER_MAX_NAME_LEN",
    "TOKENLEDGER_MAX_SYMBOL_LEN",
    "TOKENLEDGER_EVENTS_DEFAULT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    load_config.cache_clear()
    yield monkeypatch
    load_config.cache_clear()


# ---------------------------- errors ------------------------------------------


def test_error_hierarchy():
    for exc in (NullAccount(role="sender"), InsufficientBalance(), AllowanceExceeded(), CapExceeded()):
        assert isinstance(exc, LedgerError)


def test_error_to_dict_and_str():
    err = InsufficientBalance(balance=1, amount=2)
    assert err.to_dict() == {
        "code": "INSUFFICIENT_BALANCE",
        "message": "amount exceeds balance",
        "data": {"balance": 1, "amount": 2},
    }
    assert str(err).startswith("INSUFFICIENT_BALANCE: amount exceeds balance")
    assert AllowanceExceeded().to_dict() == {"code": "ALLOWANCE_EXCEEDED", "message": "amount exceeds allowance"}


def test_receipt_fields():
    assert error_to_receipt_fields(NullAccount(role="recipient")) == {
        "status": "REVERT",
        "error": {"code": "NULL_ACCOUNT", "message": "null account", "data": {"role": "recipient"}},
    }
    assert error_to_receipt_fields(LedgerCorrupted())["status"] == "ERROR"


# ---------------------------- config ------------------------------------------


def test_defaults(clean_env):
    cfg = load_config()
    assert cfg == LedgerConfig()
    assert cfg.max_amount == 2**256 - 1
    assert cfg.as_dict()["max_symbol_len"] == 11


def test_env_overrides(clean_env):
    clean_env.setenv("TOKENLEDGER_AMOUNT_BITS", "64")
    clean_env.setenv("TOKENLEDGER_MAX_NAME_LEN", "8")
    clean_env.setenv("TOKENLEDGER_EVENTS_DEFAULT", "yes")
    cfg = load_config()
    assert cfg.amount_bits == 64
    assert cfg.max_amount == 2**64 - 1
    assert cfg.max_name_len == 8
    assert cfg.events_default is True


def test_env_values_are_clamped_or_ignored(clean_env):
    clean_env.setenv("TOKENLEDGER_AMOUNT_BITS", "1")
    clean_env.setenv("TOKENLEDGER_MAX_SYMBOL_LEN", "not-a-number")
    clean_env.setenv("TOKENLEDGER_EVENTS_DEFAULT", "maybe")
    cfg = load_config()
    assert cfg.amount_bits == 8
    assert cfg.max_symbol_len == 11
    assert cfg.events_default is False


def test_config_is_cached(clean_env):
    first = load_config()
    clean_env.setenv("TOKENLEDGER_AMOUNT_BITS", "32")
    assert load_config() is first


def test_resolve_prefers_explicit(clean_env):
    explicit = LedgerConfig(amount_bits=16)
    assert resolve_config(explicit) is explicit
    assert resolve_config() == LedgerConfig()


def test_config_is_frozen():
    cfg = LedgerConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.amount_bits = 8  # type: ignore[misc]


def test_nox_matrix_starts_at_supported_floor():
    root = Path(__file__).resolve().parents[2]
    floor = re.search(r'requires-python\s*=\s*">=([\d.]+)"', (root / "pyproject.toml").read_text("utf-8"))
    matrix = re.search(r"TEST_PYTHONS\s*=\s*\[([^\]]*)\]", (root / "tests" / "noxfile.py").read_text("utf-8"))
    assert floor and matrix
    pythons = re.findall(r'"([\d.]+)"', matrix.group(1))
    assert floor.group(1) in pythons
    assert min(pythons, key=lambda v: tuple(map(int, v.split(".")))) == floor.group(1)
