"""Pseudo-legal move generation and the legal move filter."""

from __future__ import annotations

from gambit.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    is_in_check,
    is_square_attacked,
)
from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.ROOK: ROOK_DIRS,
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

KING_HOME_COL = 4
KINGSIDE_KING_COL = 6
QUEENSIDE_KING_COL = 2
# king destination col -> (rook origin col, rook destination col)
CASTLING_ROOK_COLS: dict[int, tuple[int, int]] = {
    KINGSIDE_KING_COL: (7, 5),
    QUEENSIDE_KING_COL: (0, 3),
}


def is_castling_move(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """A king moving two files is castling."""
    return piece.piece_type == PieceType.KING and abs(from_sq.col - to_sq.col) == 2


def is_en_passant_move(
    board: Board, piece: Piece, from_sq: Square, to_sq: Square
) -> bool:
    """A pawn moving diagonally onto an empty square captures en passant."""
    return (
        piece.piece_type == PieceType.PAWN
        and from_sq.col != to_sq.col
        and board.is_empty(to_sq)
    )


def relocate_castling_rook(board: Board, king_from: Square, king_to: Square) -> None:
    """Slide the rook that accompanies a castling king, marking it moved."""
    rook_from_col, rook_to_col = CASTLING_ROOK_COLS[king_to.col]
    rook_from = Square(king_from.row, rook_from_col)
    rook = board[rook_from]
    if rook is None:
        return
    board[Square(king_from.row, rook_to_col)] = rook.moved()
    board[rook_from] = None


class MoveGenerator:
    """Enumerates destinations for pieces on a :class:`Board`.

    Legality is decided by simulation: each pseudo-legal destination is
    played on a throwaway copy of the board and rejected if the mover's
    king is attacked afterwards.  The source board is never modified.
    """

    __slots__ = ("_board", "_en_passant")

    def __init__(self, board: Board, en_passant_target: Square | None = None) -> None:
        self._board = board
        self._en_passant = en_passant_target

    # -- Public API ---------------------------------------------------------

    def valid_moves(self, sq: Square) -> list[Square]:
        """Strictly legal destinations for the piece on *sq*."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            to_sq
            for to_sq in self.raw_moves(sq)
            if not is_in_check(self.simulate_move(sq, to_sq), piece.color)
        ]

    def raw_moves(self, sq: Square) -> list[Square]:
        """Pseudo-legal destinations (may leave own king in check)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Square] = []
        if piece.piece_type == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif piece.piece_type == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, KNIGHT_OFFSETS, moves)
        elif piece.piece_type == PieceType.KING:
            self._gen_steps(sq, piece.color, KING_OFFSETS, moves)
            self._gen_castling(sq, piece, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDING_DIRS[piece.piece_type], moves)
        return moves

    def legal_moves(self, color: Color) -> dict[Square, list[Square]]:
        """Legal destinations for every *color* piece that has at least one."""
        result: dict[Square, list[Square]] = {}
        for sq, _piece in self._board.pieces(color):
            moves = self.valid_moves(sq)
            if moves:
                result[sq] = moves
        return result

    def has_legal_moves(self, color: Color) -> bool:
        """Whether *color* has any legal move; stops at the first one found."""
        return any(self.valid_moves(sq) for sq, _piece in self._board.pieces(color))

    def simulate_move(self, from_sq: Square, to_sq: Square) -> Board:
        """Copy of the board with the move played, including side effects.

        En passant removes the bypassed pawn and castling relocates the
        rook, so discovered checks along either line are caught.
        """
        board = self._board.copy()
        piece = board[from_sq]
        if piece is None:
            return board

        en_passant = is_en_passant_move(board, piece, from_sq, to_sq)
        board[to_sq] = piece
        board[from_sq] = None

        if en_passant:
            board[Square(from_sq.row, to_sq.col)] = None
        if is_castling_move(piece, from_sq, to_sq):
            relocate_castling_rook(board, from_sq, to_sq)
        return board

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        step = color.forward
        start_row = 6 if color == Color.WHITE else 1

        one_step = sq.offset(step, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)
            if sq.row == start_row:
                two_step = sq.offset(2 * step, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(two_step)

        for d_col in (-1, 1):
            cap_sq = sq.offset(step, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(cap_sq)
            elif cap_sq == self._en_passant:
                moves.append(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if to_sq is None:
                continue
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while to_sq is not None:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break

    def _gen_castling(self, sq: Square, king: Piece, moves: list[Square]) -> None:
        color = king.color
        row = color.home_row
        if king.has_moved or sq.row != row or sq.col != KING_HOME_COL:
            return

        board = self._board
        opponent = color.opposite

        def rook_ready(col: int) -> bool:
            rook = board[Square(row, col)]
            return (
                rook is not None
                and rook.piece_type == PieceType.ROOK
                and rook.color == color
                and not rook.has_moved
            )

        def path_clear(cols: tuple[int, ...]) -> bool:
            return all(board.is_empty(Square(row, c)) for c in cols)

        def path_safe(cols: tuple[int, ...]) -> bool:
            return not any(
                is_square_attacked(board, Square(row, c), opponent) for c in cols
            )

        # Kingside: f and g empty; e, f, g unattacked.
        if rook_ready(7) and path_clear((5, 6)) and path_safe((4, 5, 6)):
            moves.append(Square(row, KINGSIDE_KING_COL))

        # Queenside: b, c and d empty; e, d, c unattacked.
        if rook_ready(0) and path_clear((1, 2, 3)) and path_safe((4, 3, 2)):
            moves.append(Square(row, QUEENSIDE_KING_COL))


# -- Functional entry points ------------------------------------------------


def get_raw_moves(
    board: Board, sq: Square, en_passant_target: Square | None = None
) -> list[Square]:
    return MoveGenerator(board, en_passant_target).raw_moves(sq)


def get_valid_moves(
    board: Board, sq: Square, en_passant_target: Square | None = None
) -> list[Square]:
    return MoveGenerator(board, en_passant_target).valid_moves(sq)


def has_legal_moves(
    board: Board, color: Color, en_passant_target: Square | None = None
) -> bool:
    return MoveGenerator(board, en_passant_target).has_legal_moves(color)
