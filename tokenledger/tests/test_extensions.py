# -*- coding: utf-8 -*-
"""
Capped supply and burnable extension.
"""
from __future__ import annotations

import pytest

from tokenledger import (AllowanceExceeded, Approval, BurnableToken,
                         CapExceeded, CappedBurnableToken, CappedToken,
                         CapPolicy, InsufficientBalance, InvalidMetadata,
                         LedgerConfig, NullAccount, Token, Transfer,
                         capped_token)
from tokenledger.safe_uint import U256_MAX

from .conftest import snapshot


# ---------------------------- capped ------------------------------------------


def test_cap_reported(capped):
    assert capped.cap() == 1000


def test_cap_only_on_capped_tokens(capped):
    assert not hasattr(Token("Gold", "GLD"), "cap")
    assert not hasattr(BurnableToken("Gold", "GLD"), "cap")
    assert isinstance(capped, CappedBurnableToken)
    assert isinstance(capped, CappedToken)
    assert type(capped_token("Capped", "CAP", 10)) is CappedToken


def test_capped_token_keeps_cap_policy_first(alice):
    seen = []

    class Record:
        def check_mint(self, ledger, account, amount):
            seen.append(amount)

    tok = CappedToken("Capped", "CAP", 10, mint_policies=[Record()])
    assert tok.cap() == 10
    with pytest.raises(CapExceeded):
        tok.supply.mint(alice, 11)
    assert seen == []
    tok.supply.mint(alice, 10)
    assert seen == [10]


def test_cap_above_configured_width_rejected(alice):
    narrow = LedgerConfig(amount_bits=8)
    with pytest.raises(InvalidMetadata) as ei:
        capped_token("Capped", "CAP", 1000, config=narrow)
    assert ei.value.data == {"cap": 1000, "max_amount": 255, "field": "cap"}
    with pytest.raises(InvalidMetadata):
        Token("Gold", "GLD", mint_policies=[CapPolicy(256)], config=narrow)

    tok = capped_token("Capped", "CAP", 255, config=narrow)
    tok.supply.mint(alice, 255)
    assert tok.total_supply() == tok.cap() == 255
    with pytest.raises(CapExceeded):
        tok.supply.mint(alice, 1)


def test_mint_up_to_cap_inclusive(capped, alice):
    capped.supply.mint(alice, 600)
    capped.supply.mint(alice, 400)
    assert capped.total_supply() == 1000
    # zero mint at the cap is still within bounds
    capped.supply.mint(alice, 0)


def test_mint_past_cap_fails_atomically(capped, alice, bob):
    capped.supply.mint(alice, 999)
    before = snapshot(capped, [alice, bob])
    with pytest.raises(CapExceeded) as ei:
        capped.supply.mint(bob, 2)
    assert ei.value.code == "CAP_EXCEEDED"
    assert ei.value.data == {"cap": 1000, "total_supply": 999, "amount": 2}
    assert snapshot(capped, [alice, bob]) == before
    assert capped.ledger.accounts() == [alice]


def test_burn_frees_room_under_cap(capped, alice):
    capped.supply.mint(alice, 1000)
    capped.burn(alice, 100)
    capped.supply.mint(alice, 100)
    assert capped.total_supply() == 1000


def test_cap_at_max_amount_never_overflows(alice, bob):
    tok = capped_token("Big", "BIG", U256_MAX)
    tok.supply.mint(alice, U256_MAX)
    with pytest.raises(CapExceeded):
        tok.supply.mint(bob, 1)


@pytest.mark.parametrize("cap", [0, -1, U256_MAX + 1, 1.5, True])
def test_invalid_cap(cap):
    with pytest.raises(InvalidMetadata) as ei:
        CapPolicy(cap)
    assert ei.value.data["field"] == "cap"
    with pytest.raises(InvalidMetadata):
        capped_token("Capped", "CAP", cap)


def test_capped_not_burnable_by_default():
    tok = capped_token("Capped", "CAP", 10)
    assert not hasattr(tok, "burn")


def test_capped_with_extra_policies(alice):
    class Deny:
        def check_mint(self, ledger, account, amount):
            raise CapExceeded(cap=0, total_supply=0, amount=amount)

    tok = capped_token("Capped", "CAP", 10, mint_policies=[Deny()])
    assert len(tok.supply.policies) == 2
    with pytest.raises(CapExceeded):
        tok.supply.mint(alice, 1)


# ---------------------------- burnable ----------------------------------------


def test_burn_reduces_balance_and_supply(gold, alice):
    gold.burn(alice, 100)
    assert gold.balance_of(alice) == 900
    assert gold.total_supply() == 900
    assert gold.events[-1] == Transfer(alice, None, 100)


def test_burn_more_than_balance(gold, alice, bob):
    gold.transfer(alice, bob, 10)
    before = snapshot(gold, [alice, bob])
    with pytest.raises(InsufficientBalance):
        gold.burn(bob, 11)
    assert snapshot(gold, [alice, bob]) == before


def test_burn_null_caller(gold):
    with pytest.raises(NullAccount):
        gold.burn(None, 1)


def test_burn_from_spends_allowance_then_burns(gold, alice, carol):
    gold.approve(alice, carol, 300)
    gold.burn_from(carol, alice, 200)
    assert gold.balance_of(alice) == 800
    assert gold.total_supply() == 800
    assert gold.allowance(alice, carol) == 100
    assert gold.events[-2:] == (Approval(alice, carol, 100), Transfer(alice, None, 200))


def test_burn_from_exceeding_allowance(gold, alice, carol):
    gold.approve(alice, carol, 50)
    before = snapshot(gold, [alice, carol])
    with pytest.raises(AllowanceExceeded):
        gold.burn_from(carol, alice, 51)
    assert snapshot(gold, [alice, carol]) == before


def test_burn_from_insufficient_balance_restores_allowance(gold, alice, bob, carol):
    gold.transfer(alice, bob, 10)
    gold.approve(bob, carol, 100)
    before = snapshot(gold, [alice, bob, carol])
    with pytest.raises(InsufficientBalance):
        gold.burn_from(carol, bob, 50)
    assert snapshot(gold, [alice, bob, carol]) == before
    assert gold.allowance(bob, carol) == 100


@pytest.mark.parametrize("caller,account,role", [(None, b"a", "spender"), (b"c", b"", "account")])
def test_burn_from_null_accounts(gold, caller, account, role):
    with pytest.raises(NullAccount) as ei:
        gold.burn_from(caller, account, 0)
    assert ei.value.data["role"] == role
