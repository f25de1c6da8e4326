"""
围棋规则

落子提子、禁着点（自杀）、简化劫争、数子法计分
"""

from dataclasses import dataclass, field

from arcade.types import IllegalReason
from weiqi.board import GoBoard
from weiqi.types import Point, Stone


@dataclass
class Placement:
    """落子结果"""

    reason: IllegalReason | None
    captured: list[Point] = field(default_factory=list)
    position_key: str | None = None

    @property
    def accepted(self) -> bool:
        return self.reason is None


def place_stone(
    board: GoBoard, point: Point, color: Stone, forbidden_key: str | None = None
) -> Placement:
    """尝试落子

    成功时直接修改棋盘（含提子）；非法时棋盘恢复原样。
    forbidden_key 为对方上一手之前的局面，新局面与之相同即为劫。
    """
    if not board.contains(point):
        return Placement(IllegalReason.OUT_OF_BOUNDS)
    if board.get(point) != Stone.EMPTY:
        return Placement(IllegalReason.OCCUPIED)

    before = board.copy()
    board.set(point, color)

    # 提掉没有气的相邻敌方棋块
    captured: list[Point] = []
    for neighbor in board.neighbors(point):
        if board.get(neighbor) != color.opposite:
            continue
        group = board.collect_group(neighbor)
        if not group.liberties:
            board.remove(group.stones)
            captured.extend(group.stones)

    # 自杀
    if not board.collect_group(point).liberties:
        board.restore(before)
        return Placement(IllegalReason.SUICIDE)

    key = board.position_key(color.opposite)
    if forbidden_key is not None and key == forbidden_key:
        board.restore(before)
        return Placement(IllegalReason.KO)

    return Placement(None, captured, key)


def is_legal_placement(
    board: GoBoard, point: Point, color: Stone, forbidden_key: str | None = None
) -> bool:
    """在副本上试下，不修改棋盘"""
    return place_stone(board.copy(), point, color, forbidden_key).accepted


@dataclass
class AreaScore:
    """数子结果：area = 棋子 + 围住的空点，total 再加提子数"""

    black_area: int
    white_area: int
    black_captures: int
    white_captures: int

    @property
    def black_total(self) -> int:
        return self.black_area + self.black_captures

    @property
    def white_total(self) -> int:
        return self.white_area + self.white_captures

    @property
    def winner(self) -> Stone | None:
        """和棋返回 None"""
        if self.black_total == self.white_total:
            return None
        return Stone.BLACK if self.black_total > self.white_total else Stone.WHITE

    def to_dict(self) -> dict[str, int]:
        return {
            "black_area": self.black_area,
            "white_area": self.white_area,
            "black": self.black_total,
            "white": self.white_total,
        }


def territory(board: GoBoard) -> dict[Stone, int]:
    """只被一种颜色包围的空区域归该色，双方共同接壤的为公气"""
    owned = {Stone.BLACK: 0, Stone.WHITE: 0}
    visited: set[Point] = set()
    for start in board.points():
        if start in visited or board.get(start) != Stone.EMPTY:
            continue
        region = []
        bordering: set[Stone] = set()
        stack = [start]
        visited.add(start)
        while stack:
            current = stack.pop()
            region.append(current)
            for neighbor in board.neighbors(current):
                value = board.get(neighbor)
                if value == Stone.EMPTY:
                    if neighbor not in visited:
                        visited.add(neighbor)
                        stack.append(neighbor)
                else:
                    bordering.add(value)
        if len(bordering) == 1:
            owned[bordering.pop()] += len(region)
    return owned


def score_area(board: GoBoard, captures: dict[Stone, int]) -> AreaScore:
    owned = territory(board)
    return AreaScore(
        black_area=board.count(Stone.BLACK) + owned[Stone.BLACK],
        white_area=board.count(Stone.WHITE) + owned[Stone.WHITE],
        black_captures=captures.get(Stone.BLACK, 0),
        white_captures=captures.get(Stone.WHITE, 0),
    )
