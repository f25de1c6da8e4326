"""
随机 AI 策略

easy 难度：在所有合法走法中均匀随机选择
"""

from typing import ClassVar

from xiangqi.ai.base import AIEngine, AIStrategy
from xiangqi.board import Board
from xiangqi.rules import legal_moves_for_color
from xiangqi.types import Color, Move


@AIEngine.register
class RandomAI(AIStrategy):
    """随机 AI"""

    name: ClassVar[str] = "random"

    def select_move(self, board: Board, color: Color) -> Move | None:
        legal_moves = legal_moves_for_color(board, color)
        if not legal_moves:
            return None
        return self.rng.choice(legal_moves)
