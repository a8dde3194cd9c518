"""
Ready-made token configurations.

fixed_supply_preset(name, symbol, initial_supply, owner, generate_events=False)
    Burnable token whose whole supply is minted to `owner` at construction.

capped_token(name, symbol, cap, generate_events=False, burnable=False)
    CappedToken (or CappedBurnableToken) with a CapPolicy installed; mint
    through `token.supply.mint`.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .config import LedgerConfig
from .events import EventSink
from .hooks import MintPolicy, TransferHook
from .token import BurnableToken, CappedBurnableToken, CappedToken


class FixedSupplyToken(BurnableToken):
    def __init__(
        self,
        name: str,
        symbol: str,
        initial_supply: int,
        owner: Any,
        generate_events: bool = False,
        *,
        hooks: Iterable[TransferHook] = (),
        sink: Optional[EventSink] = None,
        config: Optional[LedgerConfig] = None,
    ) -> None:
        super().__init__(name, symbol, generate_events, hooks=hooks, sink=sink, config=config)
        self.supply.mint(owner, initial_supply)


def fixed_supply_preset(
    name: str,
    symbol: str,
    initial_supply: int,
    owner: Any,
    generate_events: bool = False,
    **kwargs: Any,
) -> FixedSupplyToken:
    return FixedSupplyToken(name, symbol, initial_supply, owner, generate_events, **kwargs)


def capped_token(
    name: str,
    symbol: str,
    cap: int,
    generate_events: bool = False,
    *,
    burnable: bool = False,
    hooks: Iterable[TransferHook] = (),
    mint_policies: Iterable[MintPolicy] = (),
    sink: Optional[EventSink] = None,
    config: Optional[LedgerConfig] = None,
) -> CappedToken:
    cls = CappedBurnableToken if burnable else CappedToken
    return cls(
        name,
        symbol,
        cap,
        generate_events,
        hooks=hooks,
        mint_policies=mint_policies,
        sink=sink,
        config=config,
    )


__all__ = ["FixedSupplyToken", "fixed_supply_preset", "capped_token"]
