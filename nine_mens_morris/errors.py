from enum import Enum


class LocationErrorReason(Enum):
    MALFORMED = "Location must be a column letter followed by a row digit"
    OUT_OF_RANGE = "Column must be a-g and row must be 1-7"
    NOT_AN_INTERSECTION = "Location is not an intersection on the board"


class IllegalMoveReason(Enum):
    OCCUPIED = "Board location is occupied"
    NO_PIECE = "There is no piece at the specified location"
    OWN_PIECE = "Can't remove your own piece"
    PROTECTED_MILL = "Can't remove a piece which is part of a mill"
    NOT_YOUR_PIECE = "Can't move another player's piece"
    NO_MOVEMENT = "Must move a piece"
    NOT_ADJACENT = "Flying is not allowed yet"
    STILL_PLACING = "All pieces must be placed before moving"
    NO_PIECES_TO_PLACE = "No pieces left to place"
    REMOVAL_PENDING = "A piece must be removed first"
    REMOVAL_NOT_ALLOWED = "No mill was formed"
    GAME_OVER = "The game is over"


class MorrisError(Exception):
    """Base exception for rule and input errors."""

    pass


class InvalidLocationError(MorrisError, ValueError):
    """Raised when text or coordinates do not name an intersection."""

    def __init__(self, reason: LocationErrorReason, text: str = ""):
        self.reason = reason
        self.text = text
        detail = f" '{text}'" if text else ""
        super().__init__(f"Invalid location{detail}: {reason.value}")


class IllegalMoveError(MorrisError):
    """Raised when a move breaks the rules. The board is left unchanged."""

    def __init__(self, reason: IllegalMoveReason):
        self.reason = reason
        super().__init__(reason.value)
