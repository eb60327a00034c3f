from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .location import Location


class Stage(IntEnum):
    """Per-player game stage. Ordered; a player's stage never goes back."""

    PLACING = 0
    MOVING = 1
    FLYING = 2
    GAME_OVER = 3


class MoveOutcome(Enum):
    APPLIED = "applied"
    MILL_FORMED = "mill_formed"  # removal owed while Board.removal_pending is set
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class Move:
    """A placement (src None), a relocation (both set) or a removal (dst None)."""

    src: Optional["Location"] = None
    dst: Optional["Location"] = None

    def __post_init__(self) -> None:
        if self.src is None and self.dst is None:
            raise ValueError("A move needs a source or a destination")

    @property
    def is_placement(self) -> bool:
        return self.src is None

    @property
    def is_removal(self) -> bool:
        return self.dst is None

    def __str__(self) -> str:
        if self.src is None:
            return f"place {self.dst}"
        if self.dst is None:
            return f"remove {self.src}"
        return f"{self.src}-{self.dst}"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    player_index: int
    move: Move


@dataclass(slots=True)
class MoveResult:
    outcome: MoveOutcome
    player_index: int
    move: Move
    stage_changes: dict[int, Stage]

    @property
    def mill_formed(self) -> bool:
        return self.outcome is MoveOutcome.MILL_FORMED
