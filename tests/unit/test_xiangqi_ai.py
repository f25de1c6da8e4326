"""
AI 引擎单元测试
"""

import random
from collections import Counter

import pytest

from xiangqi.ai import AIConfig, AIEngine, HeuristicAI, RandomAI, choose_move, score_move
from xiangqi.ai.heuristic_ai import positional_activity
from xiangqi.board import Board
from xiangqi.rules import legal_moves_for_color
from xiangqi.types import Color, Move, PieceType, Position

# 自由度 43、p = 0.001 的卡方临界值
CHI_SQUARE_CRITICAL_43 = 77.4


def _chariot_duel() -> Board:
    """红车可以白吃黑车的局面"""
    board = Board.empty()
    board.place(PieceType.GENERAL, Color.RED, Position(0, 4))
    board.place(PieceType.GENERAL, Color.BLACK, Position(9, 5))
    board.place(PieceType.CHARIOT, Color.RED, Position(5, 0))
    board.place(PieceType.CHARIOT, Color.BLACK, Position(5, 8))
    return board


class TestAIEngine:
    """AI 引擎测试"""

    def test_registered_strategies(self):
        strategies = AIEngine.list_strategies()
        assert "random" in strategies
        assert "heuristic" in strategies

    def test_get_strategy(self):
        assert isinstance(AIEngine.get_strategy("random"), RandomAI)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            AIEngine.get_strategy("unknown_strategy")

    @pytest.mark.parametrize(
        "level,strategy_class",
        [("easy", RandomAI), ("medium", HeuristicAI), ("hard", HeuristicAI)],
    )
    def test_levels(self, level, strategy_class):
        assert isinstance(AIEngine.for_level(level).strategy, strategy_class)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            AIEngine.for_level("grandmaster")

    def test_engine_without_strategy(self):
        with pytest.raises(ValueError):
            AIEngine().select_move(Board.initial(), Color.RED)


class TestRandomAI:
    """随机 AI 测试"""

    def test_select_legal_move(self):
        board = Board.initial()
        move = RandomAI(rng=random.Random(1)).select_move(board, Color.RED)
        assert move in legal_moves_for_color(board, Color.RED)

    def test_seed_is_reproducible(self):
        board = Board.initial()
        first = [RandomAI(AIConfig(seed=7)).select_move(board, Color.RED) for _ in range(3)]
        second = [RandomAI(AIConfig(seed=7)).select_move(board, Color.RED) for _ in range(3)]
        assert first == second

    def test_uniform_distribution(self):
        """卡方检验：开局 44 种走法均匀分布"""
        board = Board.initial()
        legal = legal_moves_for_color(board, Color.RED)
        ai = RandomAI(rng=random.Random(20240601))

        trials = len(legal) * 50
        counts = Counter(ai.select_move(board, Color.RED) for _ in range(trials))

        assert set(counts) <= set(legal)
        expected = trials / len(legal)
        chi_square = sum((counts.get(move, 0) - expected) ** 2 / expected for move in legal)
        assert chi_square < CHI_SQUARE_CRITICAL_43

    def test_no_legal_moves(self):
        board = Board.empty()
        board.place(PieceType.GENERAL, Color.RED, Position(0, 4))
        board.place(PieceType.GENERAL, Color.BLACK, Position(9, 3))
        board.place(PieceType.CHARIOT, Color.RED, Position(8, 0))
        assert RandomAI().select_move(board, Color.BLACK) is None


class TestScoring:
    """启发式评分"""

    def test_soldier_activity(self):
        """过河兵前进"""
        move = Move(Position(4, 4), Position(5, 4))
        assert positional_activity(PieceType.SOLDIER, move, Color.RED) == 4

    def test_black_soldier_activity(self):
        move = Move(Position(6, 0), Position(5, 0))
        assert positional_activity(PieceType.SOLDIER, move, Color.BLACK) == 2

    def test_chariot_prefers_center(self):
        center = Move(Position(0, 0), Position(0, 4))
        edge = Move(Position(0, 4), Position(0, 0))
        assert positional_activity(PieceType.CHARIOT, center, Color.RED) == 8
        assert positional_activity(PieceType.CHARIOT, edge, Color.RED) == 4

    def test_capture_score(self):
        """白吃车：12 × 10 + 车的位置分"""
        board = _chariot_duel()
        move = Move(Position(5, 0), Position(5, 8))
        assert score_move(board, move, Color.RED) == 124

    def test_exposure_and_check(self):
        """将军加分，落点被攻击扣分"""
        board = _chariot_duel()
        move = Move(Position(5, 0), Position(5, 5))
        # 4 + 3 位置分 + 30 将军 - 60 被车捉
        assert score_move(board, move, Color.RED) == -23


class TestHeuristicAI:
    """启发式 AI 测试"""

    def test_takes_free_chariot(self):
        """关闭抖动后总是白吃车"""
        board = _chariot_duel()
        for seed in range(5):
            ai = HeuristicAI(AIConfig(jitter=0), random.Random(seed))
            assert ai.select_move(board, Color.RED) == Move(Position(5, 0), Position(5, 8))

    def test_takes_free_chariot_with_jitter(self):
        board = _chariot_duel()
        ai = HeuristicAI(AIConfig(jitter=0.1), random.Random(3))
        assert ai.select_move(board, Color.RED) == Move(Position(5, 0), Position(5, 8))

    def test_choose_move_levels(self):
        board = Board.initial()
        rng = random.Random(5)
        for level in ("easy", "medium", "hard"):
            move = choose_move(board, Color.BLACK, level, rng)
            assert move in legal_moves_for_color(board, Color.BLACK)

    def test_ties_broken_by_rng(self):
        """同分走法由随机数决定，同一种子结果相同"""
        board = Board.initial()
        a = HeuristicAI(AIConfig(jitter=0), random.Random(11)).select_move(board, Color.RED)
        b = HeuristicAI(AIConfig(jitter=0), random.Random(11)).select_move(board, Color.RED)
        assert a == b
