"""
API 请求/响应模型

两种棋共用同一套状态响应，格子编码与渲染帧一致
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class GameKind(str, Enum):
    """棋类"""

    GO = "go"
    XIANGQI = "xiangqi"


class AILevel(str, Enum):
    """AI 难度等级"""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PointModel(BaseModel):
    """网格坐标"""

    x: int = Field(ge=0)
    y: int = Field(ge=0)


class MoveRequest(BaseModel):
    """走棋请求

    围棋使用 point；象棋使用 from / to
    """

    point: PointModel | None = None
    from_pos: PointModel | None = Field(default=None, alias="from")
    to_pos: PointModel | None = Field(default=None, alias="to")

    model_config = ConfigDict(populate_by_name=True)


class CreateGameRequest(BaseModel):
    """创建游戏请求"""

    game: GameKind = GameKind.XIANGQI
    vs_ai: bool = True
    ai_level: AILevel = AILevel.MEDIUM
    # AI 执红还是执黑（仅象棋）
    ai_color: Literal["red", "black"] = "black"
    seed: int | None = None
    go_size: int = Field(default=19, ge=2, le=25)


class GameStateResponse(BaseModel):
    """游戏状态响应"""

    game_id: str
    game: str
    width: int
    height: int
    cells: list[list[str | None]]
    turn: str
    status: str
    winner: str | None = None
    reason: str | None = None
    message: str
    move_count: int
    captures: dict[str, int]
    in_check: bool = False
    score: dict[str, int] | None = None
    last_move: Any = None
    version: int


class MoveResponse(BaseModel):
    """走棋响应"""

    success: bool
    game_state: GameStateResponse | None = None
    error: str | None = None
    reason: str | None = None
    notation: str | None = None
    captured_count: int = 0
    ai_move: str | None = None


class LegalMovesResponse(BaseModel):
    """某个坐标的合法目标"""

    x: int
    y: int
    targets: list[tuple[int, int]]


class HistoryResponse(BaseModel):
    """走棋记录"""

    game_id: str
    moves: list[str]


class AIInfoResponse(BaseModel):
    """AI 信息响应"""

    available_strategies: list[str]
    levels: list[str]
    level_strategies: dict[str, str]
    games: list[str]
