from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from loguru import logger

from .board import Board
from .config import config
from .errors import MorrisError
from .players import BasePlayer
from .types import MoveResult


@dataclass(slots=True)
class GameController:
    """Runs the turn loop between players and the board.

    After a move forms a mill, the same player is asked for a piece to remove
    until the board accepts one, before the turn passes on.
    """

    players: Sequence[BasePlayer]
    max_turns: int = config.MAX_TURNS
    board: Board = field(init=False)
    current_index: int = field(default=0, init=False)
    turns: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.board = Board(players=self.players)

    @property
    def current_player(self) -> BasePlayer:
        return self.players[self.current_index]

    def play_turn(self) -> bool:
        """Ask the current player for one move. Returns False if it was rejected."""
        idx = self.current_index
        player = self.current_player
        try:
            move = player.get_move(self.board, idx)
            if move is None:
                logger.info(f"{player} has no legal move and passes")
                self._advance()
                return True
            result = self.board.perform_move(move, idx)
        except MorrisError as e:
            self._reject(player, e)
            return False

        logger.info(f"Turn {self.turns + 1}: {player} played {move}")
        if result.mill_formed and self.board.removal_pending == idx:
            self.resolve_removal(idx)
        self._advance()
        return True

    def resolve_removal(self, idx: int) -> MoveResult:
        """Keep asking player ``idx`` for a piece to remove until one is accepted."""
        player = self.players[idx]
        while True:
            try:
                location = player.get_piece_to_remove(self.board, idx)
                result = self.board.perform_removal(location, idx)
            except MorrisError as e:
                self._reject(player, e)
                continue
            logger.info(f"{player} removed the piece at {location}")
            for changed, stage in result.stage_changes.items():
                logger.info(f"{self.players[changed]} is now {stage.name.lower()}")
            return result

    def play(self) -> Optional[BasePlayer]:
        """Play until someone loses or the turn limit is hit. Returns the winner, if any."""
        while not self.board.is_game_over() and self.turns < self.max_turns:
            self.play_turn()

        if not self.board.is_game_over():
            logger.info(f"Turn limit of {self.max_turns} reached without a winner")
            return None
        winner = self.board.get_winning_player()
        logger.info(f"{winner} wins after {self.turns} turns")
        return winner

    def _advance(self) -> None:
        self.turns += 1
        self.current_index = (self.current_index + 1) % len(self.players)

    def _reject(self, player: BasePlayer, error: MorrisError) -> None:
        logger.warning(f"{player}: {error}")
        player.notify_error(str(error))
