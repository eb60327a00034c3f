from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence

import numpy as np
from loguru import logger

from .config import config
from .errors import IllegalMoveError, IllegalMoveReason
from .location import VALID_LOCATIONS, Location, is_adjacent
from .piece import Piece
from .render import render_board
from .types import HistoryEntry, Move, MoveOutcome, MoveResult, Stage

EMPTY = -1


@dataclass(slots=True, eq=False)
class Board:
    """Owns the grid and per-player state, and is the only judge of legality.

    Players are addressed by their index in ``players``. A move that forms a
    mill leaves a removal pending for the mover; play resumes only once
    ``perform_removal`` succeeds.
    """

    players: Sequence[object]
    _cells: list[list[Optional[Piece]]] = field(init=False, repr=False)
    _owners: np.ndarray = field(init=False, repr=False)
    _pools: list[list[Piece]] = field(init=False, repr=False)
    _stages: list[Stage] = field(init=False)
    _removed: list[int] = field(init=False)
    _history: list[HistoryEntry] = field(init=False, repr=False)
    _pending_removal: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.players = tuple(self.players)
        if len(self.players) < 2:
            raise ValueError("A game needs at least two players")
        for idx, player in enumerate(self.players):
            if player in self.players[:idx]:
                raise ValueError(f"Duplicate player: {player!r}")

        size = config.BOARD_SIZE
        self._cells = [[None] * size for _ in range(size)]
        self._owners = np.full((size, size), EMPTY, dtype=np.int8)
        self._pools = [
            [Piece(owner=idx, piece_id=i) for i in range(config.PIECES_PER_PLAYER)]
            for idx in range(len(self.players))
        ]
        self._stages = [Stage.PLACING] * len(self.players)
        self._removed = [0] * len(self.players)
        self._history = []

    # --- Queries ---
    def get_stage(self, player: int) -> Stage:
        return self._stages[player]

    def is_game_over(self) -> bool:
        return any(stage is Stage.GAME_OVER for stage in self._stages)

    def get_winning_player(self) -> Optional[object]:
        """Return the first player still in the game once the game is over, else None."""
        if not self.is_game_over():
            return None
        for idx, stage in enumerate(self._stages):
            if stage is not Stage.GAME_OVER:
                return self.players[idx]
        return None

    def get_piece_at(self, x: int, y: int) -> Optional[Piece]:
        return self._cells[y][x]

    def piece_at(self, location: Location) -> Optional[Piece]:
        return self._cells[location.y][location.x]

    def get_pieces_remaining_to_be_placed(self, player: int) -> int:
        return len(self._pools[player])

    def get_player(self, idx: int) -> object:
        return self.players[idx]

    def get_player_count(self) -> int:
        return len(self.players)

    def index_of(self, player) -> int:
        for idx, candidate in enumerate(self.players):
            if candidate == player:
                return idx
        raise IndexError(f"Player not on this board: {player!r}")

    def opponent_of(self, player: int) -> int:
        return (player + 1) % len(self.players)

    def pieces_on_board(self, player: int) -> int:
        return int(np.count_nonzero(self._owners == player))

    def pieces_removed(self, player: int) -> int:
        return self._removed[player]

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def removal_pending(self) -> Optional[int]:
        """Index of the player who formed a mill and still owes a removal."""
        return self._pending_removal

    def to_array(self) -> np.ndarray:
        """Return a (7, 7) int8 grid of owner indices indexed [y, x]; -1 when empty."""
        return self._owners.copy()

    # --- Mills ---
    def is_in_mill(self, x: int, y: int, player: int) -> bool:
        """Whether the cell (x, y) is part of three-in-a-line owned by ``player``.

        The midpoint row and column each hold two separate lines, one on either
        side of the centre, and only the half containing the cell is counted.
        """
        size = config.BOARD_SIZE
        mid = config.MIDPOINT
        mine = (self._owners == player) & VALID_LOCATIONS

        if y == mid:
            lo, hi = (0, mid) if x < mid else (mid, size)
        else:
            lo, hi = 0, size
        if np.count_nonzero(mine[y, lo:hi]) == config.MILL_LENGTH:
            return True

        if x == mid:
            lo, hi = (0, mid) if y < mid else (mid, size)
        else:
            lo, hi = 0, size
        return np.count_nonzero(mine[lo:hi, x]) == config.MILL_LENGTH

    @staticmethod
    def is_adjacent(loc1: Location, loc2: Location) -> bool:
        return is_adjacent(loc1, loc2)

    def num_pieces_in_mills(self, player: int) -> int:
        count = 0
        for y, x in zip(*np.nonzero(self._owners == player)):
            if self.is_in_mill(int(x), int(y), player):
                count += 1
        return count

    # --- Rules ---
    def check_move(self, move: Move, player: int) -> Optional[IllegalMoveReason]:
        """Return why ``move`` is illegal for ``player``, or None if it is legal."""
        if move.dst is None:
            return self.check_removal(move.src, player)
        if self.is_game_over():
            return IllegalMoveReason.GAME_OVER
        if self._pending_removal is not None:
            return IllegalMoveReason.REMOVAL_PENDING
        if self.piece_at(move.dst) is not None:
            return IllegalMoveReason.OCCUPIED
        if move.src is not None and move.src == move.dst:
            return IllegalMoveReason.NO_MOVEMENT

        stage = self._stages[player]
        if move.src is None:
            if not self._pools[player]:
                return IllegalMoveReason.NO_PIECES_TO_PLACE
            return None

        piece = self.piece_at(move.src)
        if piece is None:
            return IllegalMoveReason.NO_PIECE
        if piece.owner != player:
            return IllegalMoveReason.NOT_YOUR_PIECE
        if stage is Stage.PLACING:
            return IllegalMoveReason.STILL_PLACING
        if stage is Stage.MOVING and not is_adjacent(move.src, move.dst):
            return IllegalMoveReason.NOT_ADJACENT
        return None

    def check_removal(
        self, location: Location, player: int
    ) -> Optional[IllegalMoveReason]:
        """Return why ``player`` may not remove the piece at ``location``, or None."""
        if self._pending_removal != player:
            return IllegalMoveReason.REMOVAL_NOT_ALLOWED
        piece = self.piece_at(location)
        if piece is None:
            return IllegalMoveReason.NO_PIECE
        if piece.owner == player:
            return IllegalMoveReason.OWN_PIECE
        victim = piece.owner
        if self.is_in_mill(location.x, location.y, victim):
            unprotected = self.pieces_on_board(victim) - self.num_pieces_in_mills(victim)
            if unprotected > 0:
                return IllegalMoveReason.PROTECTED_MILL
        return None

    def perform_move(
        self,
        move: Move,
        player: int,
        on_mill_formed: Optional[Callable[[], None]] = None,
    ) -> MoveResult:
        """
        Validate and apply a placement or relocation for ``player``.

        A move without a destination is a removal and is handed to
        ``perform_removal``.

        :param move: the move to perform
        :param player: index of the acting player
        :param on_mill_formed: optional callback run synchronously when the move
            forms a mill and a removal is owed; it is expected to resolve the removal through
            ``perform_removal`` before returning
        :raises IllegalMoveError: when the move breaks the rules; the board is
            left unchanged
        :return: the outcome of the move
        """
        if move.dst is None:
            return self.perform_removal(move.src, player)

        reason = self.check_move(move, player)
        if reason is not None:
            logger.debug(f"Rejected {move} by player {player}: {reason.value}")
            raise IllegalMoveError(reason)

        if move.src is None:
            piece = self._pools[player].pop(0)
        else:
            piece = self._take(move.src)
        self._put(move.dst, piece)
        self._history.append(HistoryEntry(player_index=player, move=move))
        logger.debug(f"Player {player}: {move}")

        changes: dict[int, Stage] = {}
        self._recalculate_stage(player, changes)

        outcome = MoveOutcome.APPLIED
        if self.is_in_mill(move.dst.x, move.dst.y, player):
            outcome = MoveOutcome.MILL_FORMED
            if self._has_opponent_piece(player):
                self._pending_removal = player
                logger.debug(f"Player {player} formed a mill at {move.dst}")
            else:
                logger.debug(
                    f"Player {player} formed a mill at {move.dst} with nothing to remove"
                )

        result = MoveResult(
            outcome=outcome, player_index=player, move=move, stage_changes=changes
        )
        if self._pending_removal == player and on_mill_formed is not None:
            on_mill_formed()
        return result

    def perform_removal(self, location: Location, player: int) -> MoveResult:
        """
        Remove an opponent's piece after ``player`` formed a mill.

        :raises IllegalMoveError: when no removal is owed, the cell is empty or
            the piece may not be taken; the board is left unchanged
        """
        reason = self.check_removal(location, player)
        if reason is not None:
            logger.debug(
                f"Rejected removal at {location} by player {player}: {reason.value}"
            )
            raise IllegalMoveError(reason)

        piece = self._take(location)
        self._removed[piece.owner] += 1
        move = Move(src=location)
        self._history.append(HistoryEntry(player_index=player, move=move))
        self._pending_removal = None
        logger.debug(f"Player {player} removed piece of player {piece.owner} at {location}")

        changes: dict[int, Stage] = {}
        self._recalculate_stage(player, changes)
        self._recalculate_stage(piece.owner, changes)
        return MoveResult(
            outcome=MoveOutcome.REMOVED,
            player_index=player,
            move=move,
            stage_changes=changes,
        )

    def legal_moves(self, player: int) -> list[Move]:
        """Every placement or relocation ``player`` could make right now."""
        if self.is_game_over() or self._pending_removal is not None:
            return []
        empty = [loc for loc in Location.all() if self.piece_at(loc) is None]
        if self._stages[player] is Stage.PLACING:
            candidates: Iterator[Move] = (Move(dst=loc) for loc in empty)
        else:
            own = [loc for loc in Location.all() if self._owner_at(loc) == player]
            candidates = (Move(src=src, dst=dst) for src in own for dst in empty)
        return [mv for mv in candidates if self.check_move(mv, player) is None]

    def removable_locations(self, player: int) -> list[Location]:
        """Every location ``player`` may remove a piece from to resolve a mill."""
        return [loc for loc in Location.all() if self.check_removal(loc, player) is None]

    # --- Internals ---
    def _owner_at(self, location: Location) -> int:
        return int(self._owners[location.y, location.x])

    def _has_opponent_piece(self, player: int) -> bool:
        return bool(np.any((self._owners != EMPTY) & (self._owners != player)))

    def _put(self, location: Location, piece: Piece) -> None:
        self._cells[location.y][location.x] = piece
        self._owners[location.y, location.x] = piece.owner

    def _take(self, location: Location) -> Piece:
        piece = self._cells[location.y][location.x]
        self._cells[location.y][location.x] = None
        self._owners[location.y, location.x] = EMPTY
        return piece

    def _target_stage(self, player: int) -> Stage:
        if self._pools[player]:
            return Stage.PLACING
        on_board = self.pieces_on_board(player)
        if on_board < config.FLYING_THRESHOLD:
            return Stage.GAME_OVER
        if on_board == config.FLYING_THRESHOLD:
            return Stage.FLYING
        return Stage.MOVING

    def _recalculate_stage(self, player: int, changes: dict[int, Stage]) -> None:
        current = self._stages[player]
        updated = max(current, self._target_stage(player))
        if updated is not current:
            self._stages[player] = updated
            changes[player] = updated
            logger.debug(f"Player {player} stage: {current.name} -> {updated.name}")

    def __str__(self) -> str:
        return render_board(self)
