"""
AI Engine Module

Single-ply opponents with pluggable strategies.
"""

import random

from xiangqi.ai.base import AIConfig, AIEngine, AIStrategy
from xiangqi.ai.heuristic_ai import HeuristicAI, score_move
from xiangqi.ai.random_ai import RandomAI
from xiangqi.board import Board
from xiangqi.types import Color, Move


def choose_move(
    board: Board,
    color: Color,
    level: str = "medium",
    rng: random.Random | None = None,
    config: AIConfig | None = None,
) -> Move | None:
    """按难度为指定一方选择走法，没有合法走法时返回 None"""
    return AIEngine.for_level(level, config, rng).select_move(board, color)


__all__ = [
    "AIConfig",
    "AIEngine",
    "AIStrategy",
    "HeuristicAI",
    "RandomAI",
    "choose_move",
    "score_move",
]
