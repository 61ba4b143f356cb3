"""
Board Module

This module provides the board-position model and the FEN codec.

Key Components:
    - Board / Position: 8x8 dense grid plus side to move and castling rights
    - encode_fen / decode_fen: canonical encoder, tolerant decoder
    - count_kings / validate_for_evaluation: gate used before evaluation
    - position_to_chess_board / position_from_chess_board: python-chess interop

Data Flow:
    recognizer FEN → decode_fen() → Position → (edits) → encode_fen() → evaluator
"""

from chess_capture.board.fen import (
    EMPTY_FEN,
    STARTING_FEN,
    decode_fen,
    decode_placement,
    encode_fen,
    encode_placement,
    normalize_fen,
)
from chess_capture.board.model import (
    ALL_CASTLING,
    NO_CASTLING,
    Board,
    CastlingRight,
    Color,
    Piece,
    PieceKind,
    Position,
    Square,
    count_kings,
    king_count_errors,
    validate_for_evaluation,
)
from chess_capture.board.representation import (
    position_from_chess_board,
    position_to_chess_board,
)

__all__ = [
    'EMPTY_FEN',
    'STARTING_FEN',
    'decode_fen',
    'decode_placement',
    'encode_fen',
    'encode_placement',
    'normalize_fen',
    'ALL_CASTLING',
    'NO_CASTLING',
    'Board',
    'CastlingRight',
    'Color',
    'Piece',
    'PieceKind',
    'Position',
    'Square',
    'count_kings',
    'king_count_errors',
    'validate_for_evaluation',
    'position_from_chess_board',
    'position_to_chess_board',
]
