"""
棋子类定义

每种棋子有独立的走法规则（伪合法走法，不考虑是否送将）
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Iterator

from xiangqi.types import Color, PieceType, Position

if TYPE_CHECKING:
    from xiangqi.board import Board

ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONAL = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


class Piece(ABC):
    """棋子基类"""

    piece_type: PieceType

    def __init__(self, color: Color, position: Position):
        self.color = color
        self.position = position

    @abstractmethod
    def pseudo_moves(self, board: "Board") -> list[Position]:
        """可到达的格子，不检查走后是否被将"""

    def can_land_on(self, target: "Piece | None") -> bool:
        """目标格为空或是敌方棋子"""
        return target is None or target.color != self.color

    def _steps(self, board: "Board", offsets: Iterable[tuple[int, int]]) -> list[Position]:
        """单步走子：在棋盘内且可落脚的偏移目标"""
        targets = []
        for offset in offsets:
            pos = self.position + offset
            if pos.is_valid() and self.can_land_on(board.get_piece(pos)):
                targets.append(pos)
        return targets

    def _ray(
        self, board: "Board", step: tuple[int, int]
    ) -> Iterator[tuple[Position, "Piece | None"]]:
        """沿一个方向逐格前进直到出界"""
        pos = self.position + step
        while pos.is_valid():
            yield pos, board.get_piece(pos)
            pos = pos + step

    @property
    def code(self) -> str:
        """格子编码，例如 rR（红车）"""
        return f"{self.color.short}{self.piece_type.letter}"

    def __repr__(self) -> str:
        return f"{self.piece_type.value}({self.color.value})@{self.position}"


class General(Piece):
    """将/帅"""

    piece_type = PieceType.GENERAL

    def pseudo_moves(self, board: "Board") -> list[Position]:
        # 飞将由合法性过滤处理
        return [p for p in self._steps(board, ORTHOGONAL) if p.is_in_palace(self.color)]


class Advisor(Piece):
    """士/仕"""

    piece_type = PieceType.ADVISOR

    def pseudo_moves(self, board: "Board") -> list[Position]:
        return [p for p in self._steps(board, DIAGONAL) if p.is_in_palace(self.color)]


class Elephant(Piece):
    """象/相：走田字，不过河，塞象眼不能走"""

    piece_type = PieceType.ELEPHANT

    def pseudo_moves(self, board: "Board") -> list[Position]:
        open_offsets = [
            (2 * dr, 2 * dc)
            for dr, dc in DIAGONAL
            if board.get_piece(self.position + (dr, dc)) is None
        ]
        return [p for p in self._steps(board, open_offsets) if p.is_on_own_side(self.color)]


class Horse(Piece):
    """马：走日字，蹩马腿不能走"""

    piece_type = PieceType.HORSE

    def pseudo_moves(self, board: "Board") -> list[Position]:
        offsets = []
        for dr, dc in ORTHOGONAL:
            leg = self.position + (dr, dc)
            if not leg.is_valid() or board.get_piece(leg) is not None:
                continue
            if dr:
                offsets += [(2 * dr, -1), (2 * dr, 1)]
            else:
                offsets += [(-1, 2 * dc), (1, 2 * dc)]
        return self._steps(board, offsets)


class Chariot(Piece):
    """车"""

    piece_type = PieceType.CHARIOT

    def pseudo_moves(self, board: "Board") -> list[Position]:
        targets = []
        for step in ORTHOGONAL:
            for pos, occupant in self._ray(board, step):
                if self.can_land_on(occupant):
                    targets.append(pos)
                if occupant is not None:
                    break
        return targets


class Cannon(Piece):
    """炮：移动同车，吃子须隔一个炮架"""

    piece_type = PieceType.CANNON

    def pseudo_moves(self, board: "Board") -> list[Position]:
        targets = []
        for step in ORTHOGONAL:
            screened = False
            for pos, occupant in self._ray(board, step):
                if occupant is None:
                    if not screened:
                        targets.append(pos)
                    continue
                if not screened:
                    screened = True
                    continue
                if occupant.color != self.color:
                    targets.append(pos)
                break
        return targets


class Soldier(Piece):
    """卒/兵：过河前只能前进，过河后可横走"""

    piece_type = PieceType.SOLDIER

    def pseudo_moves(self, board: "Board") -> list[Position]:
        offsets = [(1 if self.color == Color.RED else -1, 0)]
        if not self.position.is_on_own_side(self.color):
            offsets += [(0, -1), (0, 1)]
        return self._steps(board, offsets)


PIECE_CLASSES: dict[PieceType, type[Piece]] = {
    cls.piece_type: cls
    for cls in (General, Advisor, Elephant, Horse, Chariot, Cannon, Soldier)
}


def create_piece(piece_type: PieceType, color: Color, position: Position) -> Piece:
    """按类型创建棋子"""
    return PIECE_CLASSES[piece_type](color, position)


def pseudo_moves(board: "Board", pos: Position) -> list[Position]:
    """指定格子上棋子的伪合法目标，空格返回空列表"""
    piece = board.get_piece(pos)
    return piece.pseudo_moves(board) if piece else []
