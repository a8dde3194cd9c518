"""
tokenledger.state.journal — undo journal with nested checkpoints.

Every write the ledger performs on its in-memory maps and scalars is first
recorded here as an undo entry. A checkpoint marks a position in the undo log:
`revert()` replays entries back to the mark (newest first), `commit()` simply
drops the mark. When the outermost checkpoint commits, the log is cleared.

Key properties
--------------
- Pure Python, no I/O; O(changes) revert cost.
- Map writes remember whether the key existed, so keys created inside a
  reverted checkpoint disappear again (reads stay default-on-miss).
- Writes outside any checkpoint are applied but not recorded.
- Deterministic; no reliance on wall clock or randomness.

Intended usage
--------------
    j = Journal()
    j.begin()
    j.record_item(balances, addr)
    balances[addr] = 10
    j.revert()                      # balances no longer has addr
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, List, MutableMapping, Union

_MISSING = object()


@dataclass
class _ItemWrite:
    mapping: MutableMapping[Any, Any]
    key: Hashable
    previous: Any

    def undo(self) -> None:
        if self.previous is _MISSING:
            self.mapping.pop(self.key, None)
        else:
            self.mapping[self.key] = self.previous


@dataclass
class _AttrWrite:
    target: Any
    attr: str
    previous: Any

    def undo(self) -> None:
        setattr(self.target, self.attr, self.previous)


_Entry = Union[_ItemWrite, _AttrWrite]


class Journal:
    """
    Undo log with a stack of checkpoint marks.

    API highlights
    --------------
    - begin() / commit() / revert()
    - commit_to(marker) / revert_to(marker)
    - record_item(mapping, key), record_attr(obj, name)
    """

    def __init__(self) -> None:
        self._entries: List[_Entry] = []
        self._marks: List[int] = []

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def depth(self) -> int:
        """Number of open checkpoints (0 when idle)."""
        return len(self._marks)

    def begin(self) -> int:
        """Open a checkpoint. Returns the new depth, usable as a marker."""
        self._marks.append(len(self._entries))
        return len(self._marks)

    def commit(self) -> None:
        """Close the top checkpoint keeping its writes."""
        if not self._marks:
            raise RuntimeError("commit without an open checkpoint")
        self._marks.pop()
        if not self._marks:
            self._entries.clear()

    def revert(self) -> None:
        """Close the top checkpoint undoing its writes."""
        if not self._marks:
            raise RuntimeError("revert without an open checkpoint")
        mark = self._marks.pop()
        while len(self._entries) > mark:
            self._entries.pop().undo()

    def commit_to(self, marker: int) -> None:
        """Commit repeatedly until depth equals `marker` - 1."""
        if marker < 1:
            raise ValueError("marker must be >= 1")
        while len(self._marks) >= marker:
            self.commit()

    def revert_to(self, marker: int) -> None:
        """Revert repeatedly until depth equals `marker` - 1."""
        if marker < 1:
            raise ValueError("marker must be >= 1")
        while len(self._marks) >= marker:
            self.revert()

    # --------------------------------------------------------------------- #
    # Recording
    # --------------------------------------------------------------------- #

    def record_item(self, mapping: MutableMapping[Any, Any], key: Hashable) -> None:
        """Remember the current value of mapping[key] (or its absence)."""
        if self._marks:
            self._entries.append(_ItemWrite(mapping, key, mapping.get(key, _MISSING)))

    def record_attr(self, target: Any, attr: str) -> None:
        """Remember the current value of target.attr."""
        if self._marks:
            self._entries.append(_AttrWrite(target, attr, getattr(target, attr)))

    # --------------------------------------------------------------------- #
    # Introspection
    # --------------------------------------------------------------------- #

    def pending_writes(self) -> int:
        """Number of recorded writes across open checkpoints."""
        return len(self._entries)


__all__ = ["Journal"]
