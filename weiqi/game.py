"""
围棋对局

落子/停一手/悔棋/计分，黑先
"""

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
from weiqi.board import GoBoard
from weiqi.rules import AreaScore, is_legal_placement, place_stone, score_area
from weiqi.types import BOARD_SIZE, Point, Stone


@dataclass
class GoConfig:
    """围棋配置"""

    size: int = BOARD_SIZE
    passes_to_end: int = 2  # 连续停一手次数达到即终局


@dataclass
class GoMoveRecord:
    """落子记录，point 为 None 表示停一手"""

    color: Stone
    point: Point | None
    captured: int = 0

    @property
    def is_pass(self) -> bool:
        return self.point is None

    def notation(self, size: int) -> str:
        if self.point is None:
            return f"{self.color.short} pass"
        suffix = f" x{self.captured}" if self.captured else ""
        return f"{self.color.short} {self.point.label(size)}{suffix}"


@SessionRegistry.register
class GoGame(GameSession):
    """围棋对局"""

    kind = "go"

    def __init__(self, game_id: str | None = None, config: GoConfig | None = None):
        super().__init__()
        self.game_id = game_id or str(uuid4())
        self.config = config or GoConfig()
        self._reset()

    @classmethod
    def from_config(cls, config: ArcadeConfig, game_id: str | None = None) -> "GoGame":
        return cls(game_id=game_id, config=GoConfig(size=config.go_size))

    def _reset(self) -> None:
        self.board = GoBoard(self.config.size)
        self.current_turn = Stone.BLACK
        self.move_history: list[GoMoveRecord] = []
        self.last_move: Point | None = None
        self.captures = {Stone.BLACK: 0, Stone.WHITE: 0}
        self.consecutive_passes = 0
        self.decision: Decision | None = None
        self.score: AreaScore | None = None
        self.message = ""
        # 每一手之后的局面编码，[0] 为开局
        self._position_keys = [self.board.position_key(self.current_turn)]

    # ------------------------------------------------------------------
    # 状态修改
    # ------------------------------------------------------------------

    def place_stone(self, point: Point, color: Stone | None = None) -> MoveOutcome:
        """落子，非法时棋盘和回合不变"""
        if self.decision is not None:
            return self._reject(IllegalReason.GAME_OVER, point)
        if color is not None and color != self.current_turn:
            return self._reject(IllegalReason.WRONG_TURN, point)

        player = self.current_turn
        # 对方上一手之前的局面
        forbidden = self._position_keys[-2] if len(self._position_keys) >= 2 else None
        placement = place_stone(self.board, point, player, forbidden)
        if not placement.accepted:
            return self._reject(placement.reason, point)

        captured = len(placement.captured)
        self.captures[player] += captured
        record = GoMoveRecord(player, point, captured)
        self.move_history.append(record)
        self._position_keys.append(placement.position_key)
        self.last_move = point
        self.consecutive_passes = 0
        self.message = f"Captured {captured}" if captured else ""
        self.current_turn = player.opposite
        self._touch()

        if captured:
            logger.debug(f"[{self.game_id[:8]}] {record.notation(self.board.size)}")
        return MoveOutcome.ok(captured, record.notation(self.board.size))

    def apply_move(self, coords) -> MoveOutcome:
        """coords 为 (x, y)"""
        return self.place_stone(_to_point(coords))

    def pass_turn(self, color: Stone | None = None) -> MoveOutcome:
        """停一手，连续两次停一手后计分终局"""
        if self.decision is not None:
            return MoveOutcome.rejected(IllegalReason.GAME_OVER)
        if color is not None and color != self.current_turn:
            return MoveOutcome.rejected(IllegalReason.WRONG_TURN)

        record = GoMoveRecord(self.current_turn, None)
        self.move_history.append(record)
        self.last_move = None
        self.current_turn = self.current_turn.opposite
        self._position_keys.append(self.board.position_key(self.current_turn))
        self.consecutive_passes += 1
        self.message = "Pass"

        if self.consecutive_passes >= self.config.passes_to_end:
            self.score_game()
        self._touch()
        return MoveOutcome.ok(0, record.notation(self.board.size))

    def score_game(self) -> AreaScore:
        """数子计分并终局"""
        score = score_area(self.board, self.captures)
        self.score = score
        winner = score.winner
        self.decision = Decision(winner.value if winner else None, "Score")
        self.message = f"Final B:{score.black_total} W:{score.white_total}"
        logger.info(f"[{self.game_id[:8]}] {self.message}, winner={self.decision.winner or 'draw'}")
        return score

    def undo(self) -> bool:
        """悔棋

        停一手只回退计数；落子则从空棋盘重放剩余落子（不重新结算提子），
        提子数清零
        """
        if not self.move_history:
            return False

        last = self.move_history.pop()
        self._position_keys.pop()
        self.current_turn = last.color
        self.decision = None
        self.score = None

        if last.is_pass:
            self.consecutive_passes = max(0, self.consecutive_passes - 1)
            self.message = "Undid pass"
            self._touch()
            return True

        fresh = GoBoard(self.config.size)
        for record in self.move_history:
            if not record.is_pass:
                fresh.set(record.point, record.color)
        self.board = fresh
        self.captures = {Stone.BLACK: 0, Stone.WHITE: 0}
        self.last_move = self.move_history[-1].point if self.move_history else None
        self._position_keys[-1] = self.board.position_key(self.current_turn)
        self.consecutive_passes = 0
        self.message = "Undid move"
        self._touch()
        return True

    def restart(self) -> None:
        self._reset()
        self._touch()

    def _reject(self, reason: IllegalReason, point) -> MoveOutcome:
        outcome = MoveOutcome.rejected(reason)
        self.message = outcome.illegal.message
        logger.debug(f"[{self.game_id[:8]}] rejected {tuple(point)}: {reason.value}")
        return outcome

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.decision is not None

    def is_legal(self, point: Point) -> bool:
        if self.decision is not None:
            return False
        forbidden = self._position_keys[-2] if len(self._position_keys) >= 2 else None
        return is_legal_placement(self.board, point, self.current_turn, forbidden)

    def legal_moves_from(self, coords: Coords) -> list[Coords]:
        """围棋没有“起点”，可落子时返回该点本身"""
        point = _to_point(coords)
        return [tuple(point)] if self.is_legal(point) else []

    def _captures_by_name(self) -> dict[str, int]:
        return {stone.value: count for stone, count in self.captures.items()}

    def get_status(self) -> StatusSnapshot:
        return StatusSnapshot(
            game=self.kind,
            turn=self.current_turn.value,
            status=GameStatus.DECIDED if self.decision else GameStatus.IN_PROGRESS,
            decision=self.decision,
            last_move=tuple(self.last_move) if self.last_move else None,
            score=self.score.to_dict() if self.score else None,
            message=self.message,
            move_count=len(self.move_history),
            captures=self._captures_by_name(),
        )

    def get_move_history(self) -> list[str]:
        return [record.notation(self.board.size) for record in self.move_history]

    def render_frame(self) -> RenderFrame:
        return RenderFrame(
            game=self.kind,
            width=self.board.size,
            height=self.board.size,
            cells=self.board.rows(),
            turn=self.current_turn.value,
            message=self.message,
            move_count=len(self.move_history),
            captures=self._captures_by_name(),
            last_move=tuple(self.last_move) if self.last_move else None,
            game_over=self.is_over,
        )

    def __repr__(self) -> str:
        return (
            f"GoGame({self.game_id}, turn={self.current_turn.value}, "
            f"moves={len(self.move_history)})"
        )


def _to_point(coords) -> Point:
    try:
        x, y = coords
        return Point(int(x), int(y))
    except (TypeError, ValueError):
        raise ValueError(f"Expected (x, y), got {coords!r}") from None
