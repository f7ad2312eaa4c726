"""Attack detection: is a square attacked, is a king in check."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.types import Square, in_bounds

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)


def _has_piece(
    board: Board, row: int, col: int, color: Color, piece_type: PieceType
) -> bool:
    if not in_bounds(row, col):
        return False
    piece = board[Square(row, col)]
    return piece is not None and piece.color == color and piece.piece_type == piece_type


def _ray_hits(
    board: Board,
    sq: Square,
    directions: tuple[tuple[int, int], ...],
    by_color: Color,
    attackers: tuple[PieceType, ...],
) -> bool:
    for d_row, d_col in directions:
        row = sq.row + d_row
        col = sq.col + d_col
        while in_bounds(row, col):
            piece = board[Square(row, col)]
            if piece is not None:
                if piece.color == by_color and piece.piece_type in attackers:
                    return True
                break
            row += d_row
            col += d_col
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Could any piece of *by_color* reach *sq* in one pseudo-legal step?

    Whether that capture would itself be legal for the attacker is not
    considered.
    """
    for d_row, d_col in KNIGHT_OFFSETS:
        if _has_piece(
            board, sq.row + d_row, sq.col + d_col, by_color, PieceType.KNIGHT
        ):
            return True

    if _ray_hits(board, sq, ROOK_DIRS, by_color, _ORTHOGONAL_ATTACKERS):
        return True

    if _ray_hits(board, sq, BISHOP_DIRS, by_color, _DIAGONAL_ATTACKERS):
        return True

    # Pawns attack toward the far side, so look one row "behind" sq.
    pawn_row = sq.row - by_color.forward
    for d_col in (-1, 1):
        if _has_piece(board, pawn_row, sq.col + d_col, by_color, PieceType.PAWN):
            return True

    for d_row, d_col in KING_OFFSETS:
        if _has_piece(
            board, sq.row + d_row, sq.col + d_col, by_color, PieceType.KING
        ):
            return True

    return False


def find_king(board: Board, color: Color) -> Square | None:
    """Square of *color*'s king, or ``None`` if it is not on the board."""
    for sq, piece in board.pieces(color):
        if piece.piece_type == PieceType.KING:
            return sq
    return None


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without that king is reported as not in check.
    """
    king_sq = find_king(board, color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
