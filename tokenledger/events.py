"""
tokenledger.events — Transfer/Approval records, gated emitter and sinks.

The ledger describes every successful state change with one record:

- Transfer(from_, to, value)   mint has from_=None, burn has to=None
- Approval(owner, spender, value)

Records are buffered by the :class:`EventEmitter` while an operation runs and
handed to the sink only when the outermost operation commits. A reverted
operation drops its buffer, so failed calls never emit.

Sinks
-----
- InMemoryEventSink: default; keeps records in RAM for the host to drain.
- NullEventSink: discards everything.
Hosts plug in their own transport by implementing :class:`EventSink`.

Encoding
--------
`encode_event` / `encode_events` return canonical CBOR of `to_dict()` so a
host can hash or ship records without caring about Python types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional, Protocol, Tuple, Union, runtime_checkable

import cbor2

EVT_TRANSFER = "Transfer"
EVT_APPROVAL = "Approval"


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Transfer:
    from_: Optional[Hashable]
    to: Optional[Hashable]
    value: int

    name = EVT_TRANSFER

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, "from": self.from_, "to": self.to, "value": self.value}


@dataclass(frozen=True)
class Approval:
    owner: Hashable
    spender: Hashable
    value: int

    name = EVT_APPROVAL

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, "owner": self.owner, "spender": self.spender, "value": self.value}


LedgerEvent = Union[Transfer, Approval]


def encode_event(event: LedgerEvent) -> bytes:
    """Canonical CBOR bytes for one record."""
    return cbor2.dumps(event.to_dict(), canonical=True)


def encode_events(events: Iterable[LedgerEvent]) -> bytes:
    """Canonical CBOR array of records, in emission order."""
    return cbor2.dumps([e.to_dict() for e in events], canonical=True)


# =============================================================================
# Sinks
# =============================================================================


@runtime_checkable
class EventSink(Protocol):
    def append(self, event: LedgerEvent) -> None:
        """Accept one committed record."""


class InMemoryEventSink(EventSink):
    """Keeps committed records in emission order."""

    def __init__(self) -> None:
        self._events: List[LedgerEvent] = []

    def append(self, event: LedgerEvent) -> None:
        self._events.append(event)

    def events(self) -> Tuple[LedgerEvent, ...]:
        return tuple(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


class NullEventSink(EventSink):
    def append(self, event: LedgerEvent) -> None:
        return None


# =============================================================================
# Emitter
# =============================================================================


class EventEmitter:
    """
    Gated, transaction-aware event emitter.

    `begin`/`commit`/`revert` mirror the journal checkpoints: nested commits
    fold their buffer into the parent, the outermost commit flushes to the
    sink. When the gate is closed nothing is ever recorded.
    """

    def __init__(self, enabled: bool, sink: Optional[EventSink] = None) -> None:
        self._enabled = bool(enabled)
        self._sink: EventSink = sink if sink is not None else InMemoryEventSink()
        self._buffers: List[List[LedgerEvent]] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def sink(self) -> EventSink:
        return self._sink

    def begin(self) -> None:
        self._buffers.append([])

    def commit(self) -> None:
        buf = self._buffers.pop()
        if self._buffers:
            self._buffers[-1].extend(buf)
            return
        for ev in buf:
            self._sink.append(ev)

    def revert(self) -> None:
        self._buffers.pop()

    def pending(self) -> Tuple[LedgerEvent, ...]:
        """Records buffered by open operations (not yet delivered)."""
        return tuple(ev for buf in self._buffers for ev in buf)

    # --- emission -----------------------------------------------------------

    def transfer(self, from_: Optional[Hashable], to: Optional[Hashable], value: int) -> None:
        if self._enabled:
            self._record(Transfer(from_, to, value))

    def approval(self, owner: Hashable, spender: Hashable, value: int) -> None:
        if self._enabled:
            self._record(Approval(owner, spender, value))

    def _record(self, event: LedgerEvent) -> None:
        if self._buffers:
            self._buffers[-1].append(event)
        else:
            self._sink.append(event)


__all__ = [
    "EVT_TRANSFER",
    "EVT_APPROVAL",
    "Transfer",
    "Approval",
    "LedgerEvent",
    "encode_event",
    "encode_events",
    "EventSink",
    "InMemoryEventSink",
    "NullEventSink",
    "EventEmitter",
]
