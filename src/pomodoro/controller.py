"""Pure mode transition rules for the work/break cycle."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BREAK_MODES, CYCLE_LENGTH, MODE_LONG_BREAK, MODE_SHORT_BREAK, MODE_WORK


@dataclass(frozen=True)
class ModeTransition:
    """Outcome of completing one interval."""
    completed_mode: str
    next_mode: str
    cycle_index: int
    streak_count: int

    @property
    def completed_work(self) -> bool:
        return self.completed_mode == MODE_WORK


def next_transition(mode: str, *, cycle_index: int, streak_count: int) -> ModeTransition:
    """Compute the mode, cycle index, and streak after ``mode`` completes."""
    if not 1 <= cycle_index <= CYCLE_LENGTH:
        raise ValueError(f"cycle_index must be in [1, {CYCLE_LENGTH}], got: {cycle_index}")

    if mode == MODE_WORK:
        next_mode = MODE_LONG_BREAK if cycle_index % CYCLE_LENGTH == 0 else MODE_SHORT_BREAK
        return ModeTransition(
            completed_mode=mode,
            next_mode=next_mode,
            cycle_index=cycle_index,
            streak_count=streak_count + 1,
        )

    if mode in BREAK_MODES:
        return ModeTransition(
            completed_mode=mode,
            next_mode=MODE_WORK,
            cycle_index=(cycle_index % CYCLE_LENGTH) + 1,
            streak_count=streak_count,
        )

    raise ValueError(f"Unknown mode: {mode}")
