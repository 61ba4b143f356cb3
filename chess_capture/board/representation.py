"""
python-chess Interoperability

This module converts between our Position and python-chess Board objects so
positions can be handed to python-chess based tooling (local engines, SAN
formatting, PGN export).

Coordinate Systems:
    - Ours:         Square(file, rank), rank 0 = chess rank 8 (FEN top)
    - python-chess: square index 0-63 where 0 = A1, 63 = H8

Only piece placement, side to move and castling rights are carried over.
No legality checks are performed in either direction.
"""

import chess

from chess_capture.board.model import (
    BOARD_SIZE,
    Board,
    CastlingRight,
    Color,
    Piece,
    PieceKind,
    Position,
    Square,
)

# Castling right -> python-chess rook square that carries it
CASTLING_TO_ROOK_SQUARE = {
    CastlingRight.WHITE_KINGSIDE: chess.H1,
    CastlingRight.WHITE_QUEENSIDE: chess.A1,
    CastlingRight.BLACK_KINGSIDE: chess.H8,
    CastlingRight.BLACK_QUEENSIDE: chess.A8,
}


def square_to_chess(square: Square) -> int:
    """
    Convert our Square to a python-chess square index.

    Args:
        square: Square(file, rank) with rank 0 = chess rank 8

    Returns:
        Square index (0-63) where 0=A1, 63=H8
    """
    file, rank = square
    return chess.square(file, BOARD_SIZE - 1 - rank)


def chess_to_square(index: int) -> Square:
    """
    Convert a python-chess square index to our Square.

    Args:
        index: Square index (0-63) where 0=A1, 63=H8

    Returns:
        Square(file, rank) with rank 0 = chess rank 8
    """
    return Square(chess.square_file(index), BOARD_SIZE - 1 - chess.square_rank(index))


def piece_to_chess(piece: Piece) -> chess.Piece:
    return chess.Piece(int(piece.kind), piece.color.value)


def piece_from_chess(piece: chess.Piece) -> Piece:
    return Piece(PieceKind(piece.piece_type), Color(piece.color))


def position_to_chess_board(position: Position) -> chess.Board:
    """
    Build a python-chess Board from a Position.

    Castling rights are passed through as-is; python-chess may drop rights
    whose king or rook is not on its home square when it cleans them.

    Args:
        position: Position to convert

    Returns:
        python-chess Board
    """
    board = chess.Board(fen=None)
    for square, piece in position.board.pieces():
        board.set_piece_at(square_to_chess(square), piece_to_chess(piece))

    board.turn = position.side_to_move.value
    board.castling_rights = chess.BB_EMPTY
    for right in position.castling:
        board.castling_rights |= chess.BB_SQUARES[CASTLING_TO_ROOK_SQUARE[right]]

    return board


def position_from_chess_board(board: chess.Board) -> Position:
    """
    Build a Position from a python-chess Board.

    Args:
        board: python-chess Board object

    Returns:
        Position with the same placement, side to move and castling rights
    """
    grid = Board.empty()
    for index, piece in board.piece_map().items():
        grid.set_piece_at(chess_to_square(index), piece_from_chess(piece))

    castling = frozenset(
        right
        for right, rook_square in CASTLING_TO_ROOK_SQUARE.items()
        if board.castling_rights & chess.BB_SQUARES[rook_square]
    )
    return Position(grid, Color(board.turn), castling)
