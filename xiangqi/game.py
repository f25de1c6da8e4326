"""
象棋对局会话

管理象棋对局状态、玩家回合、重复局面和悔棋快照
"""

import random
from dataclasses import dataclass
from uuid import uuid4

from loguru import logger

from arcade.config import ArcadeConfig
from arcade.session import Coords, GameSession, SessionRegistry
from arcade.types import (
    Decision,
    GameStatus,
    IllegalReason,
    MoveOutcome,
    RenderFrame,
    StatusSnapshot,
)
from xiangqi.ai import AIConfig, AIEngine
from xiangqi.board import Board
from xiangqi.rules import (
    classify_move,
    is_in_check,
    legal_moves_for_color,
    legal_moves_from,
    terminal_decision,
)
from xiangqi.types import Color, Move, PieceType, Position


@dataclass
class XiangqiConfig:
    """游戏配置"""

    vs_ai: bool = True
    ai_level: str = "medium"
    ai_color: Color = Color.BLACK
    seed: int | None = None  # 随机种子（用于复现棋局）
    jitter: float = 0.1
    max_repetitions: int = 3  # 同一局面出现次数达到即判和


@dataclass
class MoveRecord:
    """走棋记录"""

    move: Move
    color: Color
    piece_type: PieceType
    captured: PieceType | None

    @property
    def notation(self) -> str:
        """例如 r: R a1-a3，吃子用 x"""
        sep = "x" if self.captured else "-"
        return (
            f"{self.color.short}: {self.piece_type.letter} "
            f"{self.move.from_pos.to_square()}{sep}{self.move.to_pos.to_square()}"
        )


@dataclass
class Snapshot:
    """悔棋快照"""

    board: Board
    turn: Color
    decision: Decision | None
    last_move: Move | None
    history: list[MoveRecord]
    position_counts: dict[str, int]


@SessionRegistry.register
class XiangqiGame(GameSession):
    """象棋对局"""

    kind = "xiangqi"

    def __init__(
        self,
        game_id: str | None = None,
        config: XiangqiConfig | None = None,
        board: Board | None = None,
        turn: Color = Color.RED,
    ):
        super().__init__()
        self.game_id = game_id or str(uuid4())
        self.config = config or XiangqiConfig()
        self._rng = random.Random(self.config.seed)
        self._start_board = board.copy() if board is not None else Board.initial()
        self._start_turn = turn
        self._reset()

    @classmethod
    def from_config(cls, config: ArcadeConfig, game_id: str | None = None) -> "XiangqiGame":
        return cls(
            game_id=game_id,
            config=XiangqiConfig(
                vs_ai=config.vs_ai,
                ai_level=config.ai_level,
                ai_color=Color(config.ai_color),
                seed=config.seed,
                jitter=config.jitter,
            ),
        )

    @classmethod
    def from_fen(
        cls, fen: str, turn: Color | None = None, config: XiangqiConfig | None = None
    ) -> "XiangqiGame":
        """从 FEN 创建对局，走棋方取自 FEN 第二个字段（w/r 为红，b 为黑）"""
        parts = fen.split()
        if turn is None:
            turn = Color.BLACK if len(parts) > 1 and parts[1] == "b" else Color.RED
        return cls(config=config, board=Board.from_fen(fen), turn=turn)

    def _reset(self) -> None:
        self.board = self._start_board.copy()
        self.current_turn = self._start_turn
        self.move_history: list[MoveRecord] = []
        self.last_move: Move | None = None
        self.decision: Decision | None = None
        self.position_counts: dict[str, int] = {}
        self._undo_stack: list[Snapshot] = []
        self.message = "Ready"
        self._record_position()

    # ------------------------------------------------------------------
    # 状态修改
    # ------------------------------------------------------------------

    def make_move(self, move: Move) -> MoveOutcome:
        """执行走棋，非法时返回原因，棋盘不变"""
        if self.decision is not None:
            return self._reject(IllegalReason.GAME_OVER, move)

        reason = classify_move(self.board, move, self.current_turn)
        if reason is not None:
            return self._reject(reason, move)

        self._undo_stack.append(self._snapshot())

        mover = self.current_turn
        piece = self.board.get_piece(move.from_pos)
        captured = self.board.apply(move)
        record = MoveRecord(
            move, mover, piece.piece_type, captured.piece_type if captured else None
        )
        self.move_history.append(record)
        self.last_move = move
        self.current_turn = mover.opposite

        self.decision = terminal_decision(self.board, self.current_turn)
        self._record_position()
        self._update_message()
        self._touch()

        logger.debug(f"[{self.game_id[:8]}] {record.notation}")
        if self.decision is not None:
            logger.info(
                f"[{self.game_id[:8]}] game over: {self.decision.reason}, "
                f"winner={self.decision.winner or 'draw'}"
            )
        return MoveOutcome.ok(1 if captured else 0, record.notation)

    def apply_move(self, coords) -> MoveOutcome:
        """coords 为 Move，或 ((x1, y1), (x2, y2)) 网格坐标"""
        return self.make_move(_to_move(coords))

    def undo(self) -> bool:
        """撤销上一步，恢复快照"""
        if not self._undo_stack:
            return False
        snap = self._undo_stack.pop()
        self.board = snap.board
        self.current_turn = snap.turn
        self.decision = snap.decision
        self.last_move = snap.last_move
        self.move_history = snap.history
        self.position_counts = snap.position_counts
        self.message = "Undid move"
        self._touch()
        return True

    def restart(self) -> None:
        self._reset()
        self._touch()

    def _snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board.copy(),
            turn=self.current_turn,
            decision=self.decision,
            last_move=self.last_move,
            history=list(self.move_history),
            position_counts=dict(self.position_counts),
        )

    def _record_position(self) -> None:
        """局面计数，达到重复上限立即判和"""
        key = self.board.position_key(self.current_turn)
        count = self.position_counts.get(key, 0) + 1
        self.position_counts[key] = count
        if count >= self.config.max_repetitions and self.decision is None:
            self.decision = Decision(None, "Threefold repetition")
            logger.info(f"[{self.game_id[:8]}] draw by repetition")

    def _update_message(self) -> None:
        if self.decision is not None:
            self.message = self.decision.reason
        elif self.is_in_check():
            self.message = "Check"
        else:
            self.message = ""

    def _reject(self, reason: IllegalReason, move: Move) -> MoveOutcome:
        outcome = MoveOutcome.rejected(reason)
        self.message = outcome.illegal.message
        logger.debug(
            f"[{self.game_id[:8]}] rejected "
            f"{tuple(move.from_pos)}->{tuple(move.to_pos)}: {reason.value}"
        )
        return outcome

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.decision is not None

    def get_legal_moves(self) -> list[Move]:
        """获取当前方的所有合法走法"""
        return legal_moves_for_color(self.board, self.current_turn)

    def legal_moves_from(self, coords: Coords) -> list[Coords]:
        pos = Position.from_xy(*coords)
        if not pos.is_valid() or self.decision is not None:
            return []
        return [(p.x, p.y) for p in legal_moves_from(self.board, pos, self.current_turn)]

    def is_in_check(self) -> bool:
        """当前方是否被将军"""
        return is_in_check(self.board, self.current_turn)

    def captures(self) -> dict[str, int]:
        """双方吃子数"""
        counts = {Color.RED.value: 0, Color.BLACK.value: 0}
        for record in self.move_history:
            if record.captured is not None:
                counts[record.color.value] += 1
        return counts

    def get_status(self) -> StatusSnapshot:
        last = self.last_move
        return StatusSnapshot(
            game=self.kind,
            turn=self.current_turn.value,
            status=GameStatus.DECIDED if self.decision else GameStatus.IN_PROGRESS,
            decision=self.decision,
            last_move={"from": last.from_pos.to_square(), "to": last.to_pos.to_square()}
            if last
            else None,
            score=None,
            message=self.message,
            move_count=len(self.move_history),
            captures=self.captures(),
            in_check=self.is_in_check(),
        )

    def get_move_history(self) -> list[str]:
        return [record.notation for record in self.move_history]

    def render_frame(self) -> RenderFrame:
        last = self.last_move
        return RenderFrame(
            game=self.kind,
            width=Board.width,
            height=Board.height,
            cells=self.board.rows(),
            turn=self.current_turn.value,
            message=self.message,
            move_count=len(self.move_history),
            captures=self.captures(),
            last_move=((last.from_pos.x, last.from_pos.y), (last.to_pos.x, last.to_pos.y))
            if last
            else None,
            game_over=self.is_over,
        )

    # ------------------------------------------------------------------
    # 电脑对手
    # ------------------------------------------------------------------

    @property
    def ai_to_move(self) -> bool:
        return self.config.vs_ai and not self.is_over and self.current_turn == self.config.ai_color

    def choose_ai_move(self, level: str | None = None) -> Move | None:
        """为当前走棋方选择走法，与人类使用相同的合法走法集合"""
        if self.is_over:
            return None
        engine = AIEngine.for_level(
            level or self.config.ai_level,
            AIConfig(name=f"{self.current_turn.value}-ai", jitter=self.config.jitter),
            self._rng,
        )
        return engine.select_move(self.board, self.current_turn)

    def __repr__(self) -> str:
        return (
            f"XiangqiGame({self.game_id}, turn={self.current_turn.value}, "
            f"moves={len(self.move_history)})"
        )


def _to_move(coords) -> Move:
    if isinstance(coords, Move):
        return coords
    if isinstance(coords, str):
        return Move.from_notation(coords)
    try:
        (fx, fy), (tx, ty) = coords
    except (TypeError, ValueError):
        raise ValueError(f"Expected ((x1, y1), (x2, y2)), got {coords!r}") from None
    return Move(Position.from_xy(fx, fy), Position.from_xy(tx, ty))
