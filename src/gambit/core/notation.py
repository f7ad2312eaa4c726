"""Simplified algebraic notation for recorded moves.

No disambiguation between identical pieces and no ``+``/``#`` suffixes.
"""

from __future__ import annotations

from gambit.core.enums import PieceType
from gambit.core.move import Move
from gambit.core.move_generator import KINGSIDE_KING_COL
from gambit.core.types import FILE_LABELS, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def piece_letter(piece_type: PieceType) -> str:
    """Notation letter for *piece_type* (empty for pawns)."""
    return _SAN_PIECE[piece_type]


def move_to_notation(move: Move) -> str:
    """Render a recorded *move*, e.g. ``e4``, ``Nxf7``, ``exd6``, ``e8=Q``."""
    if move.is_castling:
        return "O-O" if move.to_sq.col == KINGSIDE_KING_COL else "O-O-O"

    is_pawn = move.piece.piece_type == PieceType.PAWN
    san = _SAN_PIECE[move.piece.piece_type]
    if move.is_capture:
        if is_pawn:
            san += FILE_LABELS[move.from_sq.col]
        san += "x"
    san += square_name(move.to_sq)

    if move.is_promotion and move.promoted_to is not None:
        san += "=" + _SAN_PIECE[move.promoted_to]
    return san
