"""
象棋对局单元测试
"""

import pytest

from arcade.types import GameStatus, IllegalReason
from xiangqi.board import Board
from xiangqi.game import XiangqiConfig, XiangqiGame
from xiangqi.types import Color, Move, PieceType, Position

HORSE_SHUFFLE = ["b1-c3", "b10-c8", "c3-b1", "c8-b10"]


@pytest.fixture
def game():
    return XiangqiGame(config=XiangqiConfig(vs_ai=False))


class TestGameCreation:
    """对局创建"""

    def test_initial_state(self, game):
        assert game.current_turn == Color.RED
        assert game.move_history == []
        assert not game.is_over
        assert game.message == "Ready"
        assert len(game.get_legal_moves()) == 44

    def test_from_fen(self):
        game = XiangqiGame.from_fen("4k4/9/9/9/9/9/9/9/9/3K5 b")
        assert game.current_turn == Color.BLACK
        assert game.board.find_general(Color.RED) == Position(0, 3)


class TestMakeMove:
    """走棋"""

    def test_valid_move(self, game):
        outcome = game.apply_move("b3-e3")
        assert outcome.accepted
        assert outcome.notation == "r: C b3-e3"
        assert game.current_turn == Color.BLACK
        assert game.last_move == Move(Position(2, 1), Position(2, 4))
        assert game.version == 1

    def test_grid_coordinates(self, game):
        """((x1, y1), (x2, y2)) 形式"""
        outcome = game.apply_move(((1, 0), (2, 2)))
        assert outcome.accepted
        assert game.board.get_piece(Position(2, 2)).piece_type == PieceType.HORSE

    def test_rejected_move_changes_nothing(self, game):
        before = game.board.to_fen()
        outcome = game.apply_move("a1-b1")
        assert not outcome.accepted
        assert outcome.reason == IllegalReason.OCCUPIED
        assert game.board.to_fen() == before
        assert game.current_turn == Color.RED
        assert game.version == 0

    def test_wrong_turn(self, game):
        outcome = game.apply_move("a7-a6")
        assert outcome.reason == IllegalReason.WRONG_TURN

    def test_out_of_bounds(self, game):
        outcome = game.apply_move(((0, 0), (0, 12)))
        assert outcome.reason == IllegalReason.OUT_OF_BOUNDS

    def test_capture_counted(self, game):
        outcome = game.apply_move("b3-b10")
        assert outcome.accepted
        assert outcome.captured_count == 1
        assert game.captures() == {"red": 1, "black": 0}
        assert game.get_move_history() == ["r: C b3xb10"]

    def test_malformed_coordinates(self, game):
        with pytest.raises(ValueError):
            game.apply_move(42)

    def test_pass_is_unsupported(self, game):
        assert game.pass_turn().reason == IllegalReason.UNSUPPORTED


class TestRepetition:
    """重复局面判和"""

    def test_threefold_repetition_draw(self, game):
        """开局局面第三次出现时判和"""
        for notation in HORSE_SHUFFLE:
            assert game.apply_move(notation).accepted
        assert not game.is_over

        for notation in HORSE_SHUFFLE:
            game.apply_move(notation)

        assert game.is_over
        status = game.get_status()
        assert status.status == GameStatus.DECIDED
        assert status.decision.is_draw
        assert status.decision.reason == "Threefold repetition"

    def test_moves_rejected_after_draw(self, game):
        for notation in HORSE_SHUFFLE * 2:
            game.apply_move(notation)
        assert game.apply_move("b3-e3").reason == IllegalReason.GAME_OVER

    def test_no_targets_after_draw(self, game):
        for notation in HORSE_SHUFFLE * 2:
            game.apply_move(notation)
        assert game.current_turn == Color.RED
        assert game.legal_moves_from((1, 0)) == []

    def test_undo_clears_draw(self, game):
        for notation in HORSE_SHUFFLE * 2:
            game.apply_move(notation)
        assert game.undo()
        assert not game.is_over
        assert game.apply_move("c8-b10").accepted
        assert game.is_over


class TestCheckmate:
    """将死"""

    def test_checkmate_ends_game(self):
        board = Board.empty()
        board.place(PieceType.GENERAL, Color.RED, Position(0, 3))
        board.place(PieceType.GENERAL, Color.BLACK, Position(9, 4))
        board.place(PieceType.CHARIOT, Color.RED, Position(5, 0))
        board.place(PieceType.CHARIOT, Color.RED, Position(8, 8))
        game = XiangqiGame(config=XiangqiConfig(vs_ai=False), board=board)

        outcome = game.apply_move("a6-a10")

        assert outcome.accepted
        assert game.is_over
        assert game.decision.winner == "red"
        assert game.message == "Checkmate"

    def test_check_message(self):
        board = Board.empty()
        board.place(PieceType.GENERAL, Color.RED, Position(0, 5))
        board.place(PieceType.GENERAL, Color.BLACK, Position(9, 3))
        board.place(PieceType.CHARIOT, Color.RED, Position(5, 0))
        game = XiangqiGame(config=XiangqiConfig(vs_ai=False), board=board)

        game.apply_move("a6-d6")

        assert game.message == "Check"
        assert game.get_status().in_check


class TestUndo:
    """悔棋"""

    def test_undo_restores_position(self, game):
        before = game.board.to_fen()
        game.apply_move("b3-b10")
        assert game.undo()
        assert game.board.to_fen() == before
        assert game.current_turn == Color.RED
        assert game.move_history == []
        assert game.captures() == {"red": 0, "black": 0}
        assert game.message == "Undid move"

    def test_undo_empty_history(self, game):
        assert not game.undo()
        assert game.version == 0

    def test_restart(self, game):
        game.apply_move("b3-e3")
        version = game.version
        game.restart()
        assert game.board.to_fen() == Board.initial().to_fen()
        assert game.current_turn == Color.RED
        assert game.version == version + 1


class TestQueries:
    """查询接口"""

    def test_legal_moves_from(self, game):
        """红马 (x=1, y=0) 的两个落点"""
        assert sorted(game.legal_moves_from((1, 0))) == [(0, 2), (2, 2)]

    def test_legal_moves_from_off_board(self, game):
        assert game.legal_moves_from((20, 20)) == []

    def test_status_dict(self, game):
        game.apply_move("b3-e3")
        status = game.get_status().to_dict()
        assert status["turn"] == "black"
        assert status["status"] == "in_progress"
        assert status["last_move"] == {"from": "b3", "to": "e3"}
        assert status["score"] is None

    def test_render_frame(self, game):
        frame = game.render_frame()
        assert (frame.width, frame.height) == (9, 10)
        assert frame.cells[0][4] == "rG"
        assert frame.turn == "red"
        assert not frame.game_over


class TestAIOpponent:
    """电脑对手"""

    def test_ai_to_move(self):
        game = XiangqiGame(config=XiangqiConfig(vs_ai=True, ai_color=Color.BLACK, seed=1))
        assert not game.ai_to_move
        game.apply_move("b3-e3")
        assert game.ai_to_move

    def test_ai_move_is_legal(self):
        game = XiangqiGame(config=XiangqiConfig(vs_ai=True, seed=1))
        game.apply_move("b3-e3")
        move = game.choose_ai_move()
        assert move in game.get_legal_moves()
        assert game.apply_ai_move(move).accepted
        assert game.current_turn == Color.RED

    def test_choose_does_not_mutate(self):
        game = XiangqiGame(config=XiangqiConfig(seed=2))
        version = game.version
        game.choose_ai_move("easy")
        assert game.version == version
