"""
走法合法性过滤

将军检测（含将帅对面）、模拟走棋后排除送将、终局判定
"""

from arcade.types import Decision, IllegalReason
from xiangqi.board import Board
from xiangqi.types import Color, Move, Position


def generals_facing(board: Board) -> bool:
    """两将同列且中间无子（飞将）"""
    red = board.find_general(Color.RED)
    black = board.find_general(Color.BLACK)
    if red is None or black is None or red.col != black.col:
        return False
    low, high = sorted((red.row, black.row))
    for row in range(low + 1, high):
        if board.get_piece(Position(row, red.col)) is not None:
            return False
    return True


def is_square_attacked(board: Board, pos: Position, by_color: Color) -> bool:
    """指定格子是否在某方棋子的伪合法走法内"""
    for piece in board.pieces(by_color):
        if pos in piece.pseudo_moves(board):
            return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """检查指定颜色的将/帅是否被将军

    将帅对面也算被将军；没有将时返回 False
    """
    general = board.find_general(color)
    if general is None:
        return False
    if generals_facing(board):
        return True
    return is_square_attacked(board, general, color.opposite)


def classify_move(board: Board, move: Move, color: Color) -> IllegalReason | None:
    """判断走法是否合法，合法返回 None，否则返回原因"""
    if not move.from_pos.is_valid() or not move.to_pos.is_valid():
        return IllegalReason.OUT_OF_BOUNDS

    piece = board.get_piece(move.from_pos)
    if piece is None:
        return IllegalReason.NO_PIECE
    if piece.color != color:
        return IllegalReason.WRONG_TURN

    if move.to_pos not in piece.pseudo_moves(board):
        target = board.get_piece(move.to_pos)
        if target is not None and target.color == color:
            return IllegalReason.OCCUPIED
        return IllegalReason.INVALID_PIECE_MOVE

    # 在副本上模拟走棋
    after = board.copy()
    after.apply(move)
    if generals_facing(after):
        return IllegalReason.FLYING_GENERAL_VIOLATION
    if is_in_check(after, color):
        return IllegalReason.LEAVES_OWN_GENERAL_IN_CHECK
    return None


def legal_moves_from(board: Board, pos: Position, color: Color) -> list[Position]:
    """某个棋子的所有合法目标"""
    piece = board.get_piece(pos)
    if piece is None or piece.color != color:
        return []
    return [
        to_pos
        for to_pos in piece.pseudo_moves(board)
        if classify_move(board, Move(pos, to_pos), color) is None
    ]


def legal_moves_for_color(board: Board, color: Color) -> list[Move]:
    """获取指定颜色的所有合法走法"""
    moves = []
    for piece in board.pieces(color):
        origin = piece.position
        for to_pos in legal_moves_from(board, origin, color):
            moves.append(Move(origin, to_pos))
    return moves


def has_any_legal_move(board: Board, color: Color) -> bool:
    for piece in board.pieces(color):
        if legal_moves_from(board, piece.position, color):
            return True
    return False


def terminal_decision(board: Board, side_to_move: Color) -> Decision | None:
    """判断走棋方的终局状态，未结束返回 None"""
    # 将被直接吃掉，吃将一方获胜
    if board.find_general(side_to_move) is None:
        return Decision(side_to_move.opposite.value, "General captured")

    if has_any_legal_move(board, side_to_move):
        return None

    if is_in_check(board, side_to_move):
        return Decision(side_to_move.opposite.value, "Checkmate")
    # 困毙判和
    return Decision(None, "Stalemate")
