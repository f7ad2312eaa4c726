"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import Board, MoveGenerator, E2

    board = Board.initial()
    gen = MoveGenerator(board)
    print(gen.valid_moves(E2))
"""

from gambit.core.attacks import find_king, is_in_check, is_square_attacked
from gambit.core.board import Board
from gambit.core.enums import PROMOTION_TYPES, Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import (
    MoveGenerator,
    get_raw_moves,
    get_valid_moves,
    has_legal_moves,
)
from gambit.core.notation import move_to_notation
from gambit.core.piece import Piece
from gambit.core.rules import Rules, determine_game_status
from gambit.core.types import Square, in_bounds, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "Square",
    "in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Rules functions
    "determine_game_status",
    "find_king",
    "get_raw_moves",
    "get_valid_moves",
    "has_legal_moves",
    "is_in_check",
    "is_square_attacked",
    # Notation
    "move_to_notation",
]
