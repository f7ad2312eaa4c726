"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from gambit.core.attacks import is_in_check
from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.move_generator import MoveGenerator
from gambit.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy:
    # - Automatic draws: insufficient material, no legal move without check.
    # - No repetition or fifty-move draws.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_in_check(board, color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, en_passant_target: Square | None = None
    ) -> bool:
        if not is_in_check(board, color):
            return False
        return not MoveGenerator(board, en_passant_target).has_legal_moves(color)

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, en_passant_target: Square | None = None
    ) -> bool:
        if is_in_check(board, color):
            return False
        return not MoveGenerator(board, en_passant_target).has_legal_moves(color)

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B.

        The K+B vs K+B case only asks for one bishop per side; it does not
        check which square colour the bishops run on.
        """
        pieces = [piece for _sq, piece in board.pieces()]

        # K vs K
        if len(pieces) == 2:
            return True

        # K+minor vs K
        if len(pieces) == 3:
            return any(
                p.piece_type in (PieceType.BISHOP, PieceType.KNIGHT) for p in pieces
            )

        # K+B vs K+B
        if len(pieces) == 4:
            bishops = [p for p in pieces if p.piece_type == PieceType.BISHOP]
            return len(bishops) == 2 and bishops[0].color != bishops[1].color

        return False

    @staticmethod
    def determine_game_status(
        board: Board,
        side_to_move: Color,
        en_passant_target: Square | None = None,
    ) -> GameStatus:
        """Status for *side_to_move*.

        Checkmate and stalemate take precedence over an insufficient
        material draw, which in turn takes precedence over plain check.
        """
        in_check = is_in_check(board, side_to_move)
        has_moves = MoveGenerator(board, en_passant_target).has_legal_moves(
            side_to_move
        )

        if not has_moves:
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        if Rules.is_insufficient_material(board):
            return GameStatus.DRAW
        if in_check:
            return GameStatus.CHECK
        return GameStatus.PLAYING


def determine_game_status(
    board: Board,
    side_to_move: Color,
    en_passant_target: Square | None = None,
) -> GameStatus:
    return Rules.determine_game_status(board, side_to_move, en_passant_target)
