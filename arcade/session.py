"""
游戏会话接口

围棋和象棋共用的会话契约，以及按配置选择实现的注册表
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from arcade.config import ArcadeConfig
from arcade.types import IllegalReason, MoveOutcome, RenderFrame, StatusSnapshot

Coords = tuple[int, int]


class GameSession(ABC):
    """游戏会话

    所有状态修改都经过 apply_move / pass_turn / undo / restart，
    每次修改都会递增 version，用于识别过期的电脑走法
    """

    # 游戏类型名称，用于注册和识别
    kind: ClassVar[str] = "base"
    game_id: str

    def __init__(self):
        self.version = 0
        self.message = ""

    def _touch(self) -> None:
        """状态已修改"""
        self.version += 1

    @classmethod
    @abstractmethod
    def from_config(cls, config: ArcadeConfig, game_id: str | None = None) -> "GameSession":
        """按配置创建会话"""

    @abstractmethod
    def apply_move(self, coords: Any) -> MoveOutcome:
        """执行一步（围棋为落子坐标，象棋为起点和终点坐标）"""

    def pass_turn(self) -> MoveOutcome:
        """停一手，默认不支持"""
        return MoveOutcome.rejected(IllegalReason.UNSUPPORTED)

    @abstractmethod
    def undo(self) -> bool:
        """悔棋，没有历史时返回 False"""

    @abstractmethod
    def restart(self) -> None:
        """重新开始"""

    @abstractmethod
    def legal_moves_from(self, coords: Coords) -> list[Coords]:
        """某个坐标出发的合法目标"""

    @abstractmethod
    def get_status(self) -> StatusSnapshot:
        """当前状态快照"""

    @abstractmethod
    def get_move_history(self) -> list[str]:
        """可读的走棋记录"""

    @abstractmethod
    def render_frame(self) -> RenderFrame:
        """渲染层需要的画面数据"""

    @property
    @abstractmethod
    def is_over(self) -> bool:
        """对局是否已结束"""

    @property
    def ai_to_move(self) -> bool:
        """是否轮到电脑走棋"""
        return False

    def choose_ai_move(self, level: str | None = None) -> Any | None:
        """电脑选择一步，不修改状态"""
        return None

    def apply_ai_move(self, move: Any) -> MoveOutcome:
        """执行电脑选出的走法"""
        return self.apply_move(move)


class SessionRegistry:
    """会话实现注册表"""

    _sessions: ClassVar[dict[str, type[GameSession]]] = {}

    @classmethod
    def register(cls, session_class: type[GameSession]) -> type[GameSession]:
        """注册会话实现（可用作装饰器）"""
        cls._sessions[session_class.kind] = session_class
        return session_class

    @classmethod
    def get(cls, kind: str) -> type[GameSession]:
        _load_builtin_games()
        if kind not in cls._sessions:
            available = ", ".join(sorted(cls._sessions))
            raise ValueError(f"Unknown game: {kind}. Available: {available}")
        return cls._sessions[kind]

    @classmethod
    def list_games(cls) -> list[str]:
        _load_builtin_games()
        return sorted(cls._sessions)


def create_session(config: ArcadeConfig | None = None, game_id: str | None = None) -> GameSession:
    """按配置创建游戏会话"""
    config = config or ArcadeConfig()
    return SessionRegistry.get(config.game).from_config(config, game_id)


def _load_builtin_games() -> None:
    # 导入以触发注册
    import weiqi.game  # noqa: F401
    import xiangqi.game  # noqa: F401
