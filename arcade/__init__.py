"""
Arcade

Shared session contract for the Go and Xiangqi engines.
"""

from arcade.config import ArcadeConfig
from arcade.session import GameSession, SessionRegistry, create_session
from arcade.types import Decision, GameStatus, IllegalReason, MoveOutcome, RenderFrame

__all__ = [
    "ArcadeConfig",
    "Decision",
    "GameSession",
    "GameStatus",
    "IllegalReason",
    "MoveOutcome",
    "RenderFrame",
    "SessionRegistry",
    "create_session",
]
