from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Dict, Optional, Type

from .errors import InvalidLocationError, LocationErrorReason
from .location import Location
from .types import Move

if TYPE_CHECKING:
    from .board import Board

_MOVE_SEPARATOR = re.compile(r"[\s\-]+")


def parse_move(text: str) -> Move:
    """Parse ``"d1"`` as a placement and ``"d1 d2"`` or ``"d1-d2"`` as a move."""
    parts = [p for p in _MOVE_SEPARATOR.split(text.strip().lower()) if p]
    if len(parts) == 1:
        return Move(dst=Location.from_string(parts[0]))
    if len(parts) == 2:
        return Move(
            src=Location.from_string(parts[0]), dst=Location.from_string(parts[1])
        )
    raise InvalidLocationError(LocationErrorReason.MALFORMED, text.strip())


@dataclass(eq=False)
class BasePlayer:
    """Base class for players. Players compare by identity on the board."""

    name: str
    type_name: ClassVar[str] = "base"

    def get_move(self, board: "Board", player_index: int) -> Optional[Move]:
        """Return a placement or relocation, or None when there is nothing to play."""
        raise NotImplementedError

    def get_piece_to_remove(self, board: "Board", player_index: int) -> Location:
        raise NotImplementedError

    def notify_error(self, message: str) -> None:
        """Called when the board rejected the player's last choice."""
        return None

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class HumanPlayer(BasePlayer):
    """Reads moves typed by a person."""

    type_name: ClassVar[str] = "human"
    read_line: Callable[[str], str] = field(default=input, repr=False)
    write_line: Callable[[str], None] = field(default=print, repr=False)

    def get_move(self, board: "Board", player_index: int) -> Optional[Move]:
        self.write_line(str(board))
        stage = board.get_stage(player_index).name.lower()
        text = self.read_line(f"{self.name} ({stage}) - enter a move: ")
        return parse_move(text)

    def get_piece_to_remove(self, board: "Board", player_index: int) -> Location:
        self.write_line(str(board))
        text = self.read_line(f"{self.name} formed a mill - enter a piece to remove: ")
        return Location.from_string(text.strip().lower())

    def notify_error(self, message: str) -> None:
        self.write_line(f"Illegal move: {message}")


@dataclass(eq=False)
class RandomPlayer(BasePlayer):
    """Picks uniformly among the legal moves the board reports."""

    type_name: ClassVar[str] = "random"
    rng_seed: Optional[int] = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.rng_seed)

    def get_move(self, board: "Board", player_index: int) -> Optional[Move]:
        moves = board.legal_moves(player_index)
        if not moves:
            return None
        return self.rng.choice(moves)

    def get_piece_to_remove(self, board: "Board", player_index: int) -> Location:
        return self.rng.choice(board.removable_locations(player_index))


PLAYER_REGISTRY: Dict[str, Type[BasePlayer]] = {
    HumanPlayer.type_name: HumanPlayer,
    RandomPlayer.type_name: RandomPlayer,
}


def create(type_name: str, name: str, **kwargs) -> BasePlayer:
    cls = PLAYER_REGISTRY.get(type_name.lower())
    if cls is None:
        raise KeyError(
            f"Unknown player type '{type_name}'. Available: {list(PLAYER_REGISTRY)}"
        )
    return cls(name=name, **kwargs)


def available() -> list[str]:
    return list(PLAYER_REGISTRY)
