"""
棋盘类定义

管理棋盘状态、摆子、复制和局面编码
"""

from itertools import groupby

from xiangqi.piece import Piece, create_piece
from xiangqi.types import COLS, FILE_LETTERS, ROWS, Color, Move, PieceType, Position

# FEN 字符（大写为红方）
PIECE_TO_FEN = {
    PieceType.GENERAL: "k",
    PieceType.ADVISOR: "a",
    PieceType.ELEPHANT: "e",
    PieceType.HORSE: "h",
    PieceType.CHARIOT: "r",
    PieceType.CANNON: "c",
    PieceType.SOLDIER: "p",
}
FEN_TO_PIECE = {v: k for k, v in PIECE_TO_FEN.items()}
# 兼容常见 FEN 写法
FEN_TO_PIECE.update({"b": PieceType.ELEPHANT, "n": PieceType.HORSE})

INITIAL_FEN = "rheakaehr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RHEAKAEHR"

# 文本棋盘用字 (红, 黑)
PIECE_GLYPHS = {
    PieceType.GENERAL: ("帅", "将"),
    PieceType.ADVISOR: ("仕", "士"),
    PieceType.ELEPHANT: ("相", "象"),
    PieceType.HORSE: ("傌", "马"),
    PieceType.CHARIOT: ("俥", "车"),
    PieceType.CANNON: ("炮", "砲"),
    PieceType.SOLDIER: ("兵", "卒"),
}


class Board:
    """象棋棋盘，以 Position -> Piece 的字典保存

    row 0 为红方底线，row 9 为黑方底线；col 0-8 从左到右
    """

    width = COLS
    height = ROWS

    def __init__(self):
        self._pieces: dict[Position, Piece] = {}

    @classmethod
    def initial(cls) -> "Board":
        """标准开局"""
        return cls.from_fen(INITIAL_FEN)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    def place(self, piece_type: PieceType, color: Color, pos: Position) -> Piece:
        """在指定位置新建一个棋子"""
        piece = create_piece(piece_type, color, pos)
        self._pieces[pos] = piece
        return piece

    def get_piece(self, pos: Position) -> Piece | None:
        return self._pieces.get(pos)

    def set_piece(self, pos: Position, piece: Piece | None) -> None:
        """放置棋子；piece 为 None 时清空该格"""
        if piece is None:
            self._pieces.pop(pos, None)
            return
        piece.position = pos
        self._pieces[pos] = piece

    def remove_piece(self, pos: Position) -> Piece | None:
        return self._pieces.pop(pos, None)

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """按位置排序的棋子列表，可按颜色过滤"""
        return [
            self._pieces[pos]
            for pos in sorted(self._pieces)
            if color is None or self._pieces[pos].color == color
        ]

    def find_general(self, color: Color) -> Position | None:
        return next(
            (
                pos
                for pos, piece in self._pieces.items()
                if piece.piece_type == PieceType.GENERAL and piece.color == color
            ),
            None,
        )

    def apply(self, move: Move) -> Piece | None:
        """直接移动棋子（不做合法性检查），返回被吃的棋子"""
        if move.from_pos not in self._pieces:
            raise ValueError(f"No piece at position {move.from_pos}")
        captured = self._pieces.pop(move.to_pos, None)
        self.set_piece(move.to_pos, self._pieces.pop(move.from_pos))
        return captured

    def copy(self) -> "Board":
        """结构复制，棋子对象全部新建"""
        clone = Board()
        for pos, piece in self._pieces.items():
            clone.place(piece.piece_type, piece.color, pos)
        return clone

    def position_key(self, turn: Color) -> str:
        """局面编码：走棋方 + 棋盘内容"""
        return f"{turn.short}|{self.to_fen()}"

    def _fen_char(self, pos: Position) -> str | None:
        piece = self.get_piece(pos)
        if piece is None:
            return None
        char = PIECE_TO_FEN[piece.piece_type]
        return char.upper() if piece.color == Color.RED else char

    def to_fen(self) -> str:
        """FEN 棋盘部分，从黑方底线写起"""
        ranks = []
        for row in reversed(range(ROWS)):
            chars = [self._fen_char(Position(row, col)) for col in range(COLS)]
            rank = ""
            for is_empty, run in groupby(chars, key=lambda c: c is None):
                run = list(run)
                rank += str(len(run)) if is_empty else "".join(run)
            ranks.append(rank)
        return "/".join(ranks)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """从 FEN 棋盘部分创建棋盘（忽略走棋方等后缀字段）"""
        board_part = fen.strip().split(" ")[0]
        rows = board_part.split("/")
        if len(rows) != ROWS:
            raise ValueError(f"FEN must have {ROWS} rows, got {len(rows)}")

        board = cls()
        for index, row_str in enumerate(rows):
            row = ROWS - 1 - index
            col = 0
            for char in row_str:
                if char.isdigit():
                    col += int(char)
                    continue
                piece_type = FEN_TO_PIECE.get(char.lower())
                if piece_type is None:
                    raise ValueError(f"Invalid FEN piece character: {char!r}")
                if col >= COLS:
                    raise ValueError(f"FEN row too long: {row_str!r}")
                color = Color.RED if char.isupper() else Color.BLACK
                board.place(piece_type, color, Position(row, col))
                col += 1
            if col != COLS:
                raise ValueError(f"FEN row has {col} columns: {row_str!r}")
        return board

    def rows(self) -> list[list[str | None]]:
        """渲染用的格子编码，rows()[row][col]，第一行为红方底线"""
        return [
            [
                piece.code if (piece := self.get_piece(Position(row, col))) else None
                for col in range(COLS)
            ]
            for row in range(ROWS)
        ]

    def __repr__(self) -> str:
        return f"Board({len(self._pieces)} pieces)"

    def display(self) -> str:
        """文本棋盘，黑方在上"""
        lines = []
        for row in reversed(range(ROWS)):
            cells = []
            for col in range(COLS):
                piece = self.get_piece(Position(row, col))
                if piece is None:
                    cells.append("十")
                else:
                    red, black = PIECE_GLYPHS[piece.piece_type]
                    cells.append(red if piece.color == Color.RED else black)
            lines.append(f"{row + 1:>2} " + " ".join(cells))
        lines.append("   " + "  ".join(FILE_LETTERS))
        return "\n".join(lines)
