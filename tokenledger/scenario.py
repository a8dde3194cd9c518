"""
tokenledger.scenario — replay a recorded sequence of calls against a fresh token.

A scenario document (YAML or JSON) describes one token and an ordered list of
calls. Accounts are plain strings; amounts are integers.

    token:
      kind: fixed_supply        # plain | burnable | capped | fixed_supply
      name: Gold
      symbol: GLD
      initial_supply: 1000      # fixed_supply
      owner: alice              # fixed_supply
      cap: 5000                 # capped
      burnable: true            # capped (optional)
      events: true
    calls:
      - {op: transfer, caller: alice, recipient: bob, amount: 200}
      - {op: approve, caller: alice, spender: carol, amount: 150}
      - {op: transfer_from, caller: carol, sender: alice, recipient: dave, amount: 1000,
         expect_error: ALLOWANCE_EXCEEDED}

`mint` calls go through `token.supply` (the path presets and extensions use).
Replay is deterministic: the same document always yields the same report.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import yaml

from .config import LedgerConfig
from .errors import LedgerError
from .presets import capped_token, fixed_supply_preset
from .token import BurnableToken, Token

log = logging.getLogger(__name__)


class ScenarioError(ValueError):
    """The scenario document itself is malformed."""


# op -> ordered argument names (after the token)
OPS: Dict[str, Tuple[str, ...]] = {
    "transfer": ("caller", "recipient", "amount"),
    "approve": ("caller", "spender", "amount"),
    "transfer_from": ("caller", "sender", "recipient", "amount"),
    "increase_allowance": ("caller", "spender", "amount"),
    "decrease_allowance": ("caller", "spender", "amount"),
    "burn": ("caller", "amount"),
    "burn_from": ("caller", "account", "amount"),
    "mint": ("account", "amount"),
}


@dataclass
class StepResult:
    index: int
    op: str
    ok: bool
    error_code: Optional[str] = None
    expected_error: Optional[str] = None

    @property
    def matched(self) -> bool:
        if self.expected_error is None:
            return self.ok
        return (not self.ok) and self.error_code == self.expected_error


@dataclass
class ReplayReport:
    token: Token
    steps: List[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(s.matched for s in self.steps)

    def failures(self) -> List[StepResult]:
        return [s for s in self.steps if not s.matched]

    def as_dict(self) -> Dict[str, Any]:
        token = self.token
        return {
            "name": token.name(),
            "symbol": token.symbol(),
            "total_supply": token.total_supply(),
            "balances": {str(a): b for a, b in token.ledger.balances()},
            "allowances": [
                {"owner": str(o), "spender": str(s), "value": v}
                for o, s, v in token.allowance_entries()
            ],
            "events": [e.to_dict() for e in token.events],
            "steps": [
                {
                    "index": s.index,
                    "op": s.op,
                    "ok": s.ok,
                    "error": s.error_code,
                    "expected_error": s.expected_error,
                    "matched": s.matched,
                }
                for s in self.steps
            ],
            "ok": self.ok,
        }


# ----------------------------------------------------------------------------
# Loading
# ----------------------------------------------------------------------------


def load_scenario(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ScenarioError(f"{path}: scenario is not UTF-8 text: {e}") from e
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            doc = yaml.safe_load(text)
        else:
            doc = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ScenarioError(f"{path}: cannot parse scenario: {e}") from e
    if not isinstance(doc, Mapping):
        raise ScenarioError(f"{path}: scenario must be a mapping")
    return dict(doc)


# ----------------------------------------------------------------------------
# Building & replay
# ----------------------------------------------------------------------------


def _require(d: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in d:
        raise ScenarioError(f"{where}: missing '{key}'")
    return d[key]


# call fields naming an account; amounts are checked by the ledger itself
ACCOUNT_FIELDS = frozenset({"caller", "recipient", "spender", "sender", "account", "owner"})


def _account(value: Any, key: str, where: str) -> Any:
    """Scenario accounts are strings or integers; null passes through to the ledger."""
    if value is None or isinstance(value, (str, int)):
        return value
    raise ScenarioError(f"{where}: '{key}' must be a string or integer account")


def _arg(d: Mapping[str, Any], key: str, where: str) -> Any:
    value = _require(d, key, where)
    if key in ACCOUNT_FIELDS:
        return _account(value, key, where)
    return value


def build_token(
    spec: Mapping[str, Any],
    *,
    events: Optional[bool] = None,
    config: Optional[LedgerConfig] = None,
) -> Token:
    """Construct the token described by a scenario's `token` section."""
    kind = str(spec.get("kind", "plain"))
    name = _require(spec, "name", "token")
    symbol = _require(spec, "symbol", "token")
    gen = bool(spec.get("events", False)) if events is None else events

    if kind == "plain":
        return Token(name, symbol, gen, config=config)
    if kind == "burnable":
        return BurnableToken(name, symbol, gen, config=config)
    if kind == "capped":
        return capped_token(
            name, symbol, _require(spec, "cap", "token"), gen,
            burnable=bool(spec.get("burnable", False)), config=config,
        )
    if kind == "fixed_supply":
        return fixed_supply_preset(
            name, symbol,
            _require(spec, "initial_supply", "token"),
            _arg(spec, "owner", "token"),
            gen,
            config=config,
        )
    raise ScenarioError(f"token: unknown kind '{kind}'")


def _dispatch(token: Token, op: str) -> Callable[..., Any]:
    if op == "mint":
        return token.supply.mint
    if op in ("burn", "burn_from") and not isinstance(token, BurnableToken):
        raise ScenarioError(f"op '{op}' requires a burnable token")
    return getattr(token, op)


def apply_call(token: Token, index: int, call: Mapping[str, Any]) -> StepResult:
    where = f"calls[{index}]"
    op = str(_require(call, "op", where))
    if op not in OPS:
        raise ScenarioError(f"{where}: unknown op '{op}'")
    args = [_arg(call, name, where) for name in OPS[op]]
    fn = _dispatch(token, op)
    expected = call.get("expect_error")

    try:
        fn(*args)
    except LedgerError as err:
        log.debug("%s %s failed: %s", where, op, err.code)
        return StepResult(index, op, ok=False, error_code=err.code, expected_error=expected)
    return StepResult(index, op, ok=True, expected_error=expected)


def replay(
    doc: Mapping[str, Any],
    *,
    events: Optional[bool] = None,
    config: Optional[LedgerConfig] = None,
) -> ReplayReport:
    """Build the token and apply every call in order, collecting step results."""
    token_spec = _require(doc, "token", "scenario")
    if not isinstance(token_spec, Mapping):
        raise ScenarioError("scenario: 'token' must be a mapping")
    calls = doc.get("calls") or []
    if not isinstance(calls, list):
        raise ScenarioError("scenario: 'calls' must be a list")

    report = ReplayReport(token=build_token(token_spec, events=events, config=config))
    for i, call in enumerate(calls):
        if not isinstance(call, Mapping):
            raise ScenarioError(f"calls[{i}]: must be a mapping")
        report.steps.append(apply_call(report.token, i, call))
    report.token.ledger.check_invariants()
    return report


__all__ = [
    "OPS",
    "ScenarioError",
    "StepResult",
    "ReplayReport",
    "load_scenario",
    "build_token",
    "apply_call",
    "replay",
]
