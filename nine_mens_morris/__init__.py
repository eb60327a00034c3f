"""
Nine Men's Morris rules engine.
The board validates and applies placements, moves and mill removals.
"""

from .board import Board
from .config import config
from .controller import GameController
from .errors import (
    IllegalMoveError,
    IllegalMoveReason,
    InvalidLocationError,
    LocationErrorReason,
    MorrisError,
)
from .location import VALID_LOCATIONS, Location, is_adjacent
from .piece import Piece
from .players import BasePlayer, HumanPlayer, RandomPlayer
from .types import HistoryEntry, Move, MoveOutcome, MoveResult, Stage

__all__ = [
    "Board",
    "config",
    "GameController",
    "IllegalMoveError",
    "IllegalMoveReason",
    "InvalidLocationError",
    "LocationErrorReason",
    "MorrisError",
    "VALID_LOCATIONS",
    "Location",
    "is_adjacent",
    "Piece",
    "BasePlayer",
    "HumanPlayer",
    "RandomPlayer",
    "HistoryEntry",
    "Move",
    "MoveOutcome",
    "MoveResult",
    "Stage",
]
