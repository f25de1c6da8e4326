"""
围棋棋盘

网格存储、邻接点、棋块与气的计算、局面编码
"""

from dataclasses import dataclass, field
from typing import Iterator

from weiqi.types import BOARD_SIZE, Point, Stone


@dataclass
class Group:
    """棋块：同色四连通的棋子及其气"""

    color: Stone
    stones: list[Point] = field(default_factory=list)
    liberties: set[Point] = field(default_factory=set)


class GoBoard:
    """围棋棋盘，grid[y][x]"""

    def __init__(self, size: int = BOARD_SIZE):
        if size < 2 or size > 25:
            raise ValueError(f"Unsupported board size: {size}")
        self.size = size
        self._grid: list[list[Stone]] = [[Stone.EMPTY] * size for _ in range(size)]

    def contains(self, point: Point) -> bool:
        return 0 <= point.x < self.size and 0 <= point.y < self.size

    def get(self, point: Point) -> Stone:
        return self._grid[point.y][point.x]

    def set(self, point: Point, stone: Stone) -> None:
        self._grid[point.y][point.x] = stone

    def neighbors(self, point: Point) -> list[Point]:
        """上下左右在棋盘内的邻点"""
        x, y = point
        candidates = [Point(x + 1, y), Point(x - 1, y), Point(x, y + 1), Point(x, y - 1)]
        return [p for p in candidates if self.contains(p)]

    def collect_group(self, point: Point) -> Group:
        """从某个棋子出发洪水填充整块棋，同时收集气"""
        color = self.get(point)
        group = Group(color)
        seen = {point}
        stack = [point]
        while stack:
            current = stack.pop()
            group.stones.append(current)
            for neighbor in self.neighbors(current):
                value = self.get(neighbor)
                if value == Stone.EMPTY:
                    group.liberties.add(neighbor)
                elif value == color and neighbor not in seen:
                    seen.add(neighbor)
                    stack.append(neighbor)
        return group

    def remove(self, points: list[Point]) -> None:
        for point in points:
            self.set(point, Stone.EMPTY)

    def count(self, stone: Stone) -> int:
        return sum(row.count(stone) for row in self._grid)

    def points(self) -> Iterator[Point]:
        for y in range(self.size):
            for x in range(self.size):
                yield Point(x, y)

    def copy(self) -> "GoBoard":
        new_board = GoBoard.__new__(GoBoard)
        new_board.size = self.size
        new_board._grid = [list(row) for row in self._grid]
        return new_board

    def restore(self, snapshot: "GoBoard") -> None:
        """恢复为另一个棋盘的内容"""
        self._grid = [list(row) for row in snapshot._grid]

    def position_key(self, turn: Stone) -> str:
        """局面编码：走棋方 + 逐行棋子"""
        rows = "|".join("".join(stone.short for stone in row) for row in self._grid)
        return f"{turn.short}|{rows}"

    def rows(self) -> list[list[str | None]]:
        """渲染用的格子编码，rows()[y][x]"""
        return [[None if s == Stone.EMPTY else s.short for s in row] for row in self._grid]

    def display(self) -> str:
        """返回棋盘的文本表示"""
        symbols = {Stone.EMPTY: "·", Stone.BLACK: "●", Stone.WHITE: "○"}
        lines = []
        for y, row in enumerate(self._grid):
            lines.append(f"{self.size - y:>2} " + " ".join(symbols[s] for s in row))
        lines.append("   " + " ".join(Point(x, 0).label(self.size)[0] for x in range(self.size)))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"GoBoard({self.size}x{self.size})"
