"""
Notifications the service publishes about a game.

The domain layer only reports what happened; the service turns that into one of these events (it knows the game ID).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameCreated:
    game_id: int
    white: str
    black: str


@dataclass(frozen=True)
class MoveApplied:
    game_id: int
    mover: str
    from_square: str
    to_square: str


@dataclass(frozen=True)
class GameEnded:
    game_id: int
    winner: str


GameEvent = GameCreated | MoveApplied | GameEnded
