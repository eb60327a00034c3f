from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .config import config
from .errors import InvalidLocationError, LocationErrorReason

COLUMNS = "abcdefg"
ROWS = "1234567"


def _compute_valid_locations() -> np.ndarray:
    """Build the [y, x] mask of intersections on the 7x7 grid.

    A cell is valid on the midpoint row or column, or on either diagonal,
    except the centre itself.
    """
    size = config.BOARD_SIZE
    mid = config.MIDPOINT
    ys, xs = np.indices((size, size))
    mask = (xs == mid) | (ys == mid) | (xs == ys) | (xs == size - 1 - ys)
    mask[mid, mid] = False
    mask.setflags(write=False)
    return mask


VALID_LOCATIONS = _compute_valid_locations()


def is_valid(x: int, y: int) -> bool:
    if not (0 <= x < config.BOARD_SIZE and 0 <= y < config.BOARD_SIZE):
        return False
    return bool(VALID_LOCATIONS[y, x])


@dataclass(frozen=True, slots=True)
class Location:
    """A single intersection on the board, e.g. ``d1`` is (3, 0)."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if not (0 <= self.x < config.BOARD_SIZE and 0 <= self.y < config.BOARD_SIZE):
            raise InvalidLocationError(LocationErrorReason.OUT_OF_RANGE)
        if not VALID_LOCATIONS[self.y, self.x]:
            raise InvalidLocationError(
                LocationErrorReason.NOT_AN_INTERSECTION, f"{COLUMNS[self.x]}{ROWS[self.y]}"
            )

    @classmethod
    def from_string(cls, text: str) -> "Location":
        """
        Parse the two-character form: a column letter then a row digit.

        :param text: location text such as ``"a1"`` or ``"g7"``
        :raises InvalidLocationError: if the text is malformed, out of range,
            or does not name an intersection
        """
        if len(text) != 2:
            raise InvalidLocationError(LocationErrorReason.MALFORMED, text)
        column, row = text[0], text[1]
        if column not in COLUMNS or row not in ROWS:
            raise InvalidLocationError(LocationErrorReason.OUT_OF_RANGE, text)
        x = COLUMNS.index(column)
        y = ROWS.index(row)
        if not VALID_LOCATIONS[y, x]:
            raise InvalidLocationError(LocationErrorReason.NOT_AN_INTERSECTION, text)
        return cls(x, y)

    @classmethod
    def all(cls) -> Iterator["Location"]:
        """Yield every intersection in row-major order (a1, d1, g1, b2, ...)."""
        for y, x in zip(*np.nonzero(VALID_LOCATIONS)):
            yield cls(int(x), int(y))

    def __str__(self) -> str:
        return f"{COLUMNS[self.x]}{ROWS[self.y]}"


_VERTICAL = ((0, 1), (0, -1))
_HORIZONTAL = ((1, 0), (-1, 0))


def next_intersection(x: int, y: int, dx: int, dy: int) -> tuple[int, int] | None:
    """First valid cell from (x, y) in direction (dx, dy).

    The centre splits the midpoint row and column into two separate lines, so
    reaching it ends the scan.
    """
    size = config.BOARD_SIZE
    mid = config.MIDPOINT
    nx, ny = x + dx, y + dy
    while 0 <= nx < size and 0 <= ny < size:
        if nx == mid and ny == mid:
            return None
        if VALID_LOCATIONS[ny, nx]:
            return nx, ny
        nx, ny = nx + dx, ny + dy
    return None


def is_adjacent(loc1: Location, loc2: Location) -> bool:
    """Check the two locations are neighbours joined by a line on the board."""
    if loc1.x == loc2.x:
        directions = _VERTICAL
    elif loc1.y == loc2.y:
        directions = _HORIZONTAL
    else:
        return False
    target = (loc2.x, loc2.y)
    return any(
        next_intersection(loc1.x, loc1.y, dx, dy) == target for dx, dy in directions
    )
