"""
围棋基础类型
"""

from enum import Enum
from typing import NamedTuple

BOARD_SIZE = 19

# 围棋坐标字母（跳过 I）
COLUMN_LETTERS = "ABCDEFGHJKLMNOPQRSTUVWXYZ"


class Stone(Enum):
    """格子状态"""

    EMPTY = "empty"
    BLACK = "black"
    WHITE = "white"

    @property
    def opposite(self) -> "Stone":
        if self == Stone.BLACK:
            return Stone.WHITE
        if self == Stone.WHITE:
            return Stone.BLACK
        return Stone.EMPTY

    @property
    def short(self) -> str:
        return {Stone.BLACK: "B", Stone.WHITE: "W", Stone.EMPTY: "."}[self]


class Point(NamedTuple):
    """交叉点 (x, y)，y = 0 为上边"""

    x: int
    y: int

    def label(self, size: int = BOARD_SIZE) -> str:
        """常用记法，例如 D16"""
        return f"{COLUMN_LETTERS[self.x]}{size - self.y}"
