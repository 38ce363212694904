"""Move history: append-only log of applied moves with position snapshots."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator
from dataclasses import dataclass

from gambit.core.move import Move
from gambit.core.notation.fen import position_to_fen
from gambit.core.position import Position


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Read-only view of one history entry."""

    move: Move
    san: str
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass(frozen=True, slots=True)
class _Entry:
    record: MoveRecord
    position: Position


class MoveHistory:
    """Ordered record of a game from its starting position.

    Every entry keeps a full snapshot of the position the move produced, so
    any earlier position can be restored exactly. Snapshots never leave this
    object uncopied.

    Only :class:`~gambit.game.state.GameState` calls :meth:`push`,
    :meth:`pop` and :meth:`restart`.
    """

    __slots__ = ("_start", "_entries", "_occurrences")

    def __init__(self, start: Position) -> None:
        self._start = start.copy()
        self._entries: list[_Entry] = []
        self._occurrences: defaultdict[int, list[Position]] = defaultdict(list)
        self._occurrences[self._start.repetition_key].append(self._start)

    # ── Mutation (owner only) ────────────────────────────────────────────

    def push(self, move: Move, san: str, position: Position, was_check: bool) -> MoveRecord:
        snapshot = position.copy()
        record = MoveRecord(
            move=move,
            san=san,
            fen_after=position_to_fen(snapshot),
            was_check=was_check,
            was_capture=move.is_capture,
        )
        self._entries.append(_Entry(record, snapshot))
        self._occurrences[snapshot.repetition_key].append(snapshot)
        return record

    def pop(self) -> MoveRecord:
        """Drop the last entry; raises ``IndexError`` when empty."""
        entry = self._entries.pop()
        key = entry.position.repetition_key
        self._occurrences[key].pop()
        if not self._occurrences[key]:
            del self._occurrences[key]
        return entry.record

    def restart(self, start: Position) -> None:
        self._start = start.copy()
        self._entries.clear()
        self._occurrences = defaultdict(list)
        self._occurrences[self._start.repetition_key].append(self._start)

    # ── Queries ──────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MoveRecord]:
        return (entry.record for entry in self._entries)

    def __getitem__(self, index: int) -> MoveRecord:
        return self._entries[index].record

    @property
    def start_position(self) -> Position:
        return self._start.copy()

    def position_at(self, index: int) -> Position:
        """Copy of the position after *index* plies (0 = start)."""
        if not 0 <= index <= len(self._entries):
            raise IndexError(
                f"Position index {index} out of range 0..{len(self._entries)}"
            )
        if index == 0:
            return self._start.copy()
        return self._entries[index - 1].position.copy()

    def latest_position(self) -> Position:
        return self.position_at(len(self._entries))

    def repetition_count(self, position: Position) -> int:
        """How many recorded positions repeat *position*.

        Key matches are confirmed field by field, so a hash collision is
        never counted.
        """
        seen = self._occurrences.get(position.repetition_key, [])
        return sum(1 for earlier in seen if earlier.is_repetition_of(position))

    def moves(self) -> list[Move]:
        return [entry.record.move for entry in self._entries]

    def sans(self) -> list[str]:
        return [entry.record.san for entry in self._entries]
