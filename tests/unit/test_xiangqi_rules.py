"""
合法性过滤与终局判定测试
"""

from arcade.types import IllegalReason
from xiangqi.board import Board
from xiangqi.rules import (
    classify_move,
    generals_facing,
    has_any_legal_move,
    is_in_check,
    legal_moves_for_color,
    legal_moves_from,
    terminal_decision,
)
from xiangqi.types import Color, Move, PieceType, Position


def _board_with(*placements) -> Board:
    board = Board.empty()
    for piece_type, color, pos in placements:
        board.place(piece_type, color, pos)
    return board


class TestInitialPosition:
    """初始局面"""

    def test_red_has_44_legal_moves(self):
        """红方开局共 44 种合法走法"""
        assert len(legal_moves_for_color(Board.initial(), Color.RED)) == 44

    def test_black_has_44_legal_moves(self):
        assert len(legal_moves_for_color(Board.initial(), Color.BLACK)) == 44

    def test_no_check_at_start(self):
        board = Board.initial()
        assert not is_in_check(board, Color.RED)
        assert not is_in_check(board, Color.BLACK)
        assert not generals_facing(board)


class TestCheck:
    """将军检测"""

    def test_chariot_gives_check(self):
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 4)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 3)),
            (PieceType.CHARIOT, Color.BLACK, Position(5, 4)),
        )
        assert is_in_check(board, Color.RED)
        assert not is_in_check(board, Color.BLACK)

    def test_facing_generals_count_as_check(self):
        """将帅对面视为被将军"""
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 4)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 4)),
        )
        assert generals_facing(board)
        assert is_in_check(board, Color.RED)
        assert is_in_check(board, Color.BLACK)

    def test_missing_general_is_not_check(self):
        board = _board_with((PieceType.CHARIOT, Color.BLACK, Position(5, 4)))
        assert not is_in_check(board, Color.RED)


class TestClassifyMove:
    """非法原因"""

    def test_out_of_bounds(self):
        board = Board.initial()
        move = Move(Position(0, 0), Position(10, 0))
        assert classify_move(board, move, Color.RED) == IllegalReason.OUT_OF_BOUNDS

    def test_no_piece(self):
        move = Move(Position(4, 4), Position(5, 4))
        assert classify_move(Board.initial(), move, Color.RED) == IllegalReason.NO_PIECE

    def test_wrong_turn(self):
        move = Move(Position(6, 0), Position(5, 0))
        assert classify_move(Board.initial(), move, Color.RED) == IllegalReason.WRONG_TURN

    def test_occupied_by_own_piece(self):
        move = Move(Position(0, 0), Position(0, 1))
        assert classify_move(Board.initial(), move, Color.RED) == IllegalReason.OCCUPIED

    def test_invalid_piece_move(self):
        move = Move(Position(0, 1), Position(1, 1))
        assert classify_move(Board.initial(), move, Color.RED) == IllegalReason.INVALID_PIECE_MOVE

    def test_legal_move(self):
        move = Move(Position(2, 1), Position(2, 4))
        assert classify_move(Board.initial(), move, Color.RED) is None

    def test_cannot_expose_generals(self):
        """挡在两将之间的棋子不能离开这一列"""
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 4)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 4)),
            (PieceType.CHARIOT, Color.RED, Position(4, 4)),
        )
        move = Move(Position(4, 4), Position(4, 0))
        assert classify_move(board, move, Color.RED) == IllegalReason.FLYING_GENERAL_VIOLATION
        # 沿着这一列走仍然合法
        assert classify_move(board, Move(Position(4, 4), Position(6, 4)), Color.RED) is None

    def test_general_cannot_step_into_facing(self):
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 3)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 4)),
        )
        move = Move(Position(0, 3), Position(0, 4))
        assert classify_move(board, move, Color.RED) == IllegalReason.FLYING_GENERAL_VIOLATION

    def test_cannot_leave_general_in_check(self):
        """被将军时不能走无关的棋子"""
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 4)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 3)),
            (PieceType.CHARIOT, Color.BLACK, Position(5, 4)),
            (PieceType.SOLDIER, Color.RED, Position(3, 0)),
        )
        move = Move(Position(3, 0), Position(4, 0))
        assert classify_move(board, move, Color.RED) == IllegalReason.LEAVES_OWN_GENERAL_IN_CHECK

    def test_pinned_horse(self):
        """被牵制的马不能离开"""
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 4)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 3)),
            (PieceType.HORSE, Color.RED, Position(2, 4)),
            (PieceType.CHARIOT, Color.BLACK, Position(6, 4)),
        )
        assert legal_moves_from(board, Position(2, 4), Color.RED) == []


class TestLegalMoves:
    """合法走法集合"""

    def test_legal_moves_never_leave_general_exposed(self):
        """任何合法走法之后己方都不被将军"""
        board = Board.initial()
        for move in legal_moves_for_color(board, Color.RED):
            after = board.copy()
            after.apply(move)
            assert not is_in_check(after, Color.RED)
            assert not generals_facing(after)

    def test_legal_moves_from_other_side_piece(self):
        """不是走棋方的棋子没有合法目标"""
        assert legal_moves_from(Board.initial(), Position(9, 0), Color.RED) == []


class TestTerminalDecision:
    """终局判定"""

    def test_ongoing(self):
        assert terminal_decision(Board.initial(), Color.RED) is None

    def test_checkmate(self):
        """双车错杀"""
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 3)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 4)),
            (PieceType.CHARIOT, Color.RED, Position(9, 0)),
            (PieceType.CHARIOT, Color.RED, Position(8, 8)),
        )
        assert is_in_check(board, Color.BLACK)
        assert not has_any_legal_move(board, Color.BLACK)

        decision = terminal_decision(board, Color.BLACK)
        assert decision.winner == "red"
        assert decision.reason == "Checkmate"

    def test_stalemate_is_draw(self):
        """困毙：没有合法走法但未被将军"""
        board = _board_with(
            (PieceType.GENERAL, Color.RED, Position(0, 4)),
            (PieceType.GENERAL, Color.BLACK, Position(9, 3)),
            (PieceType.CHARIOT, Color.RED, Position(8, 0)),
        )
        assert not is_in_check(board, Color.BLACK)
        assert legal_moves_for_color(board, Color.BLACK) == []

        decision = terminal_decision(board, Color.BLACK)
        assert decision.is_draw
        assert decision.reason == "Stalemate"

    def test_missing_general_loses(self):
        board = _board_with((PieceType.GENERAL, Color.RED, Position(0, 4)))
        decision = terminal_decision(board, Color.BLACK)
        assert decision.winner == "red"
        assert decision.reason == "General captured"
