"""
tokenledger.cli
---------------

Developer CLI for the token ledger.

- replay: run a YAML/JSON scenario against a fresh token and print the final
  balances, allowances and events (or the full report as JSON).
- info:   print the effective configuration.

Examples
--------
tokenledger replay scenarios/gold.yaml
tokenledger replay scenarios/gold.yaml --json
tokenledger replay scenarios/gold.json --no-events --verbose
tokenledger info
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .checks import account_label
from .config import load_config
from .errors import LedgerError
from .scenario import ReplayReport, ScenarioError, load_scenario, replay
from .version import __version__

app = typer.Typer(
    name="tokenledger",
    add_completion=False,
    no_args_is_help=True,
    help="Replay and inspect fungible-token ledger scenarios.",
)

console = Console()


def _render(report: ReplayReport) -> None:
    token = report.token
    console.print(
        f"[bold]{token.name()}[/bold] ({token.symbol()})  total supply: {token.total_supply()}"
    )

    bal = Table(title="Balances")
    bal.add_column("account")
    bal.add_column("balance", justify="right")
    for account, amount in token.ledger.balances():
        bal.add_row(account_label(account), str(amount))
    console.print(bal)

    entries = token.allowance_entries()
    if entries:
        allow = Table(title="Allowances")
        allow.add_column("owner")
        allow.add_column("spender")
        allow.add_column("value", justify="right")
        for owner, spender, value in entries:
            allow.add_row(account_label(owner), account_label(spender), str(value))
        console.print(allow)

    if token.events:
        ev = Table(title="Events")
        ev.add_column("#", justify="right")
        ev.add_column("event")
        ev.add_column("fields")
        for i, e in enumerate(token.events):
            d = e.to_dict()
            name = d.pop("event")
            fields = ", ".join(f"{k}={v if k == 'value' else account_label(v)}" for k, v in d.items())
            ev.add_row(str(i), name, fields)
        console.print(ev)

    steps = Table(title="Calls")
    steps.add_column("#", justify="right")
    steps.add_column("op")
    steps.add_column("result")
    for s in report.steps:
        if s.ok:
            result = "ok"
        else:
            result = s.error_code or "error"
        style = "green" if s.matched else "red"
        if s.expected_error:
            result += f" (expected {s.expected_error})"
        steps.add_row(str(s.index), s.op, f"[{style}]{result}[/{style}]")
    console.print(steps)


@app.command("replay")
def replay_cmd(
    scenario: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML or JSON scenario file."),
    json_out: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    events: Optional[bool] = typer.Option(
        None, "--events/--no-events", help="Override the scenario's event flag."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    """Replay SCENARIO against a fresh token."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if events is None and load_config().events_default:
        events = True

    try:
        report = replay(load_scenario(scenario), events=events)
    except ScenarioError as e:
        typer.secho(f"invalid scenario: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)
    except LedgerError as e:
        typer.secho(f"ledger error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    if json_out:
        typer.echo(json.dumps(report.as_dict(), indent=2, sort_keys=True, default=str))
    else:
        _render(report)

    if not report.ok:
        for s in report.failures():
            typer.secho(
                f"calls[{s.index}] {s.op}: got {s.error_code or 'ok'}, expected {s.expected_error or 'ok'}",
                fg=typer.colors.RED,
                err=True,
            )
        raise typer.Exit(1)


@app.command("info")
def info_cmd() -> None:
    """Print version and effective configuration."""
    cfg = load_config().as_dict()
    cfg["version"] = __version__
    typer.echo(json.dumps(cfg, indent=2, sort_keys=True))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
