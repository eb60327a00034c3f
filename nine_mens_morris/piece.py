from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Piece:
    """Lightweight piece model. Holds ownership only.

    Where a piece sits is tracked by the board grid, never by the piece, so a
    relocated piece keeps its identity and owner.
    """

    owner: int  # player index
    piece_id: int  # 0..8 per player, in placement order
