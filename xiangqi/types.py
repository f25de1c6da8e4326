"""
象棋基础类型：阵营、棋子种类、坐标与走法
"""

from enum import Enum
from typing import NamedTuple

ROWS = 10
COLS = 9

# 列号 -> 字母（记谱用）
FILE_LETTERS = "abcdefghi"


class Color(Enum):
    """阵营，红方先走"""

    RED = "red"
    BLACK = "black"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.RED else Color.RED

    @property
    def short(self) -> str:
        return "r" if self == Color.RED else "b"


class PieceType(Enum):
    """棋子种类"""

    GENERAL = "general"  # 将/帅
    ADVISOR = "advisor"  # 士/仕
    ELEPHANT = "elephant"  # 象/相
    HORSE = "horse"
    CHARIOT = "chariot"
    CANNON = "cannon"
    SOLDIER = "soldier"  # 卒/兵

    @property
    def letter(self) -> str:
        return PIECE_LETTERS[self]


PIECE_LETTERS = {
    PieceType.GENERAL: "G",
    PieceType.ADVISOR: "A",
    PieceType.ELEPHANT: "E",
    PieceType.HORSE: "H",
    PieceType.CHARIOT: "R",
    PieceType.CANNON: "C",
    PieceType.SOLDIER: "S",
}


class Position(NamedTuple):
    """棋盘坐标 (row, col)，x = col，y = row；row 0 是红方底线"""

    row: int
    col: int

    @property
    def x(self) -> int:
        return self.col

    @property
    def y(self) -> int:
        return self.row

    @classmethod
    def from_xy(cls, x: int, y: int) -> "Position":
        return cls(y, x)

    def is_valid(self) -> bool:
        return 0 <= self.row < ROWS and 0 <= self.col < COLS

    def is_in_palace(self, color: Color) -> bool:
        """九宫：中间三列，己方底线起三行"""
        rows = range(0, 3) if color == Color.RED else range(ROWS - 3, ROWS)
        return 3 <= self.col <= 5 and self.row in rows

    def is_on_own_side(self, color: Color) -> bool:
        """未过河"""
        return (self.row < ROWS // 2) == (color == Color.RED)

    def to_square(self) -> str:
        """坐标记法，例如 a1（红方左下角）"""
        return f"{FILE_LETTERS[self.col]}{self.row + 1}"

    @classmethod
    def from_square(cls, square: str) -> "Position":
        square = square.strip().lower()
        if len(square) < 2 or square[0] not in FILE_LETTERS or not square[1:].isdigit():
            raise ValueError(f"Invalid square: {square!r}")
        pos = cls(int(square[1:]) - 1, FILE_LETTERS.index(square[0]))
        if not pos.is_valid():
            raise ValueError(f"Square off the board: {square!r}")
        return pos

    def __add__(self, other: tuple[int, int]) -> "Position":
        return Position(self.row + other[0], self.col + other[1])


class Move(NamedTuple):
    """一步棋：起点和终点"""

    from_pos: Position
    to_pos: Position

    def to_notation(self) -> str:
        """转换为坐标记谱，例如 b3-e3"""
        return f"{self.from_pos.to_square()}-{self.to_pos.to_square()}"

    @classmethod
    def from_notation(cls, notation: str) -> "Move":
        """解析 "b3-e3" 或 "b3 e3" """
        parts = notation.replace("-", " ").split()
        if len(parts) != 2:
            raise ValueError(f"Invalid move notation: {notation!r}")
        return cls(Position.from_square(parts[0]), Position.from_square(parts[1]))
