"""
共享结果类型

两种棋类共用的走棋结果、非法原因和状态快照
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IllegalReason(Enum):
    """非法操作原因"""

    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"
    WRONG_TURN = "wrong_turn"
    SUICIDE = "suicide"
    KO = "ko"
    LEAVES_OWN_GENERAL_IN_CHECK = "leaves_own_general_in_check"
    FLYING_GENERAL_VIOLATION = "flying_general_violation"
    GAME_OVER = "game_over"
    NO_PIECE = "no_piece"
    INVALID_PIECE_MOVE = "invalid_piece_move"
    UNSUPPORTED = "unsupported"


# 显示给玩家的提示文字
REASON_MESSAGES = {
    IllegalReason.OUT_OF_BOUNDS: "Illegal: off the board",
    IllegalReason.OCCUPIED: "Illegal: point occupied",
    IllegalReason.WRONG_TURN: "Illegal: not your turn",
    IllegalReason.SUICIDE: "Illegal: suicide move",
    IllegalReason.KO: "Illegal: ko",
    IllegalReason.LEAVES_OWN_GENERAL_IN_CHECK: "Illegal: general left in check",
    IllegalReason.FLYING_GENERAL_VIOLATION: "Illegal: generals facing",
    IllegalReason.GAME_OVER: "Game is over",
    IllegalReason.NO_PIECE: "Illegal: no piece to move",
    IllegalReason.INVALID_PIECE_MOVE: "Illegal: piece cannot move there",
    IllegalReason.UNSUPPORTED: "Not supported in this game",
}


@dataclass(frozen=True)
class IllegalMove:
    """非法走棋（作为返回值，不抛出）"""

    reason: IllegalReason

    @property
    def message(self) -> str:
        return REASON_MESSAGES[self.reason]


@dataclass(frozen=True)
class MoveOutcome:
    """一次走棋/停一手的结果"""

    accepted: bool
    captured_count: int = 0
    illegal: IllegalMove | None = None
    notation: str | None = None

    @property
    def reason(self) -> IllegalReason | None:
        return self.illegal.reason if self.illegal else None

    @classmethod
    def ok(cls, captured_count: int = 0, notation: str | None = None) -> "MoveOutcome":
        return cls(True, captured_count, None, notation)

    @classmethod
    def rejected(cls, reason: IllegalReason) -> "MoveOutcome":
        return cls(False, 0, IllegalMove(reason))


class GameStatus(Enum):
    """终局状态"""

    IN_PROGRESS = "in_progress"
    DECIDED = "decided"


@dataclass(frozen=True)
class Decision:
    """对局结果

    winner 为 None 表示和棋
    """

    winner: str | None
    reason: str

    @property
    def is_draw(self) -> bool:
        return self.winner is None


@dataclass
class StatusSnapshot:
    """对局状态快照"""

    game: str
    turn: str
    status: GameStatus
    decision: Decision | None
    last_move: Any
    score: dict[str, float] | None
    message: str
    move_count: int
    captures: dict[str, int] = field(default_factory=dict)
    in_check: bool = False

    def to_dict(self) -> dict:
        """序列化为字典"""
        return {
            "game": self.game,
            "turn": self.turn,
            "status": self.status.value,
            "winner": self.decision.winner if self.decision else None,
            "reason": self.decision.reason if self.decision else None,
            "last_move": self.last_move,
            "score": self.score,
            "message": self.message,
            "move_count": self.move_count,
            "captures": self.captures,
            "in_check": self.in_check,
        }


@dataclass
class RenderFrame:
    """渲染层按需获取的画面数据

    cells 为逐行的格子编码（空格子为 None）
    """

    game: str
    width: int
    height: int
    cells: list[list[str | None]]
    turn: str
    message: str
    move_count: int
    captures: dict[str, int] = field(default_factory=dict)
    last_move: Any = None
    selected: tuple[int, int] | None = None
    targets: list[tuple[int, int]] = field(default_factory=list)
    game_over: bool = False
