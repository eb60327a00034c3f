import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass(slots=True)
class Config:
    # --- Constants ---
    BOARD_SIZE: int = 7  # 7x7 logical grid, 24 valid intersections
    PIECES_PER_PLAYER: int = 9
    NUM_PLAYERS: int = 2
    FLYING_THRESHOLD: int = 3  # pieces on board at which a player may fly
    MILL_LENGTH: int = 3

    # --- Runtime settings (env) ---
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 500))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SEED: int | None = _optional_int("SEED")

    # Derived (populated in __post_init__ due to slots)
    MIDPOINT: int = 0

    def __post_init__(self):
        self.MIDPOINT = self.BOARD_SIZE // 2

        if self.BOARD_SIZE != 7:
            raise ValueError("Only the standard 7x7 board is supported")
        if self.MAX_TURNS < 1:
            raise ValueError("MAX_TURNS must be positive")


config = Config()
