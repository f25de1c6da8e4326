"""
启发式 AI 策略

只看一步：吃子价值 + 位置活跃度 + 将军奖励 - 落点被攻击的风险
"""

from typing import ClassVar

from loguru import logger

from xiangqi.ai.base import AIEngine, AIStrategy
from xiangqi.board import Board
from xiangqi.rules import is_in_check, is_square_attacked, legal_moves_for_color
from xiangqi.types import Color, Move, PieceType

# 棋子基础价值
PIECE_VALUES = {
    PieceType.GENERAL: 1000,
    PieceType.CHARIOT: 10,
    PieceType.CANNON: 7,
    PieceType.HORSE: 5,
    PieceType.ELEPHANT: 3,
    PieceType.ADVISOR: 3,
    PieceType.SOLDIER: 2,
}

CAPTURE_WEIGHT = 12
EXPOSURE_WEIGHT = 6
CHECK_BONUS = 30
CENTER_COL = 4


def piece_value(piece_type: PieceType) -> int:
    return PIECE_VALUES.get(piece_type, 0)


def positional_activity(piece_type: PieceType, move: Move, color: Color) -> int:
    """位置活跃度加分"""
    activity = 0
    if piece_type == PieceType.SOLDIER:
        advance = move.to_pos.row - move.from_pos.row
        if color == Color.BLACK:
            advance = -advance
        activity += advance * 2
        # 过河兵
        if not move.to_pos.is_on_own_side(color):
            activity += 2
    elif piece_type == PieceType.CHARIOT:
        activity += 4 + (CENTER_COL - abs(move.to_pos.col - CENTER_COL))
    elif piece_type == PieceType.CANNON:
        activity += 2
    return activity


def score_move(board: Board, move: Move, color: Color) -> float:
    """不含抖动的走法评分"""
    piece = board.get_piece(move.from_pos)
    if piece is None:
        raise ValueError(f"No piece at position {move.from_pos}")

    target = board.get_piece(move.to_pos)
    capture = piece_value(target.piece_type) * CAPTURE_WEIGHT if target else 0

    after = board.copy()
    after.apply(move)

    activity = positional_activity(piece.piece_type, move, color)
    exposure = (
        piece_value(piece.piece_type) * EXPOSURE_WEIGHT
        if is_square_attacked(after, move.to_pos, color.opposite)
        else 0
    )
    check_bonus = CHECK_BONUS if is_in_check(after, color.opposite) else 0

    return capture + activity + check_bonus - exposure


@AIEngine.register
class HeuristicAI(AIStrategy):
    """单步启发式 AI

    jitter > 0 时在分数上叠加 [0, jitter) 的随机扰动，近似同分的走法随机决胜；
    jitter = 0 时分数为整数，只在完全同分的走法中随机选择
    """

    name: ClassVar[str] = "heuristic"

    def evaluate(self, board: Board, move: Move, color: Color) -> float:
        score = score_move(board, move, color)
        if self.config.jitter > 0:
            score += self.rng.random() * self.config.jitter
        return score

    def select_move(self, board: Board, color: Color) -> Move | None:
        legal_moves = legal_moves_for_color(board, color)
        if not legal_moves:
            return None

        best_score = float("-inf")
        best_moves: list[Move] = []
        for move in legal_moves:
            score = self.evaluate(board, move, color)
            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        choice = self.rng.choice(best_moves)
        logger.debug(
            f"{self.name} picked {choice.to_notation()} "
            f"score={best_score:.2f} ties={len(best_moves)} of {len(legal_moves)}"
        )
        return choice
