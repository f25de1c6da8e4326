"""
输入/渲染端口

画面绘制和像素到网格的换算由外部实现，这里只定义交互的数据形状
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from arcade.types import RenderFrame


class Command(Enum):
    """键盘命令"""

    RESTART = "restart"
    UNDO = "undo"
    PASS = "pass"


KEY_BINDINGS = {
    "r": Command.RESTART,
    "u": Command.UNDO,
    "p": Command.PASS,
}


def command_for_key(key: str) -> Command | None:
    """按键对应的命令，未绑定的按键返回 None"""
    return KEY_BINDINGS.get(key.lower()) if key else None


@dataclass(frozen=True)
class PointerEvent:
    """指针事件，point 已换算为网格坐标 (x, y)"""

    point: tuple[int, int]
    button: int = 0  # 0 为主键

    @property
    def is_primary(self) -> bool:
        return self.button == 0


class RenderPort(Protocol):
    """渲染端口"""

    def render(self, frame: RenderFrame) -> None: ...


class NullRenderer:
    """不绘制任何东西，只保留最后一帧"""

    def __init__(self):
        self.frames = 0
        self.last_frame: RenderFrame | None = None

    def render(self, frame: RenderFrame) -> None:
        self.frames += 1
        self.last_frame = frame
