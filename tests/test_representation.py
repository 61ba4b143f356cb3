"""
Tests for python-chess interoperability.
"""

import chess
import pytest

from chess_capture.board.fen import decode_fen, encode_fen
from chess_capture.board.model import ALL_CASTLING, CastlingRight, Color, Position, Square
from chess_capture.board.representation import (
    chess_to_square,
    position_from_chess_board,
    position_to_chess_board,
    square_to_chess,
)


class TestSquareMapping:
    """Test mapping between our squares and python-chess indices."""

    def test_corners(self):
        assert square_to_chess(Square(0, 0)) == chess.A8
        assert square_to_chess(Square(7, 7)) == chess.H1
        assert square_to_chess(Square(4, 7)) == chess.E1

    def test_round_trip(self):
        for index in chess.SQUARES:
            assert square_to_chess(chess_to_square(index)) == index

    def test_names_agree(self):
        for index in chess.SQUARES:
            assert chess_to_square(index).name == chess.square_name(index)


class TestPositionConversion:
    """Test Position <-> chess.Board conversion."""

    def test_starting_position_to_chess(self):
        board = position_to_chess_board(Position.starting())
        assert board.fen() == chess.STARTING_FEN

    def test_starting_position_from_chess(self):
        position = position_from_chess_board(chess.Board())
        assert position == Position.starting()
        assert position.castling == ALL_CASTLING

    @pytest.mark.parametrize("fen", [
        "4k3/8/8/8/8/8/8/4K3 b - - 0 1",
        "r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1",
        "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 0 1",
    ])
    def test_round_trip(self, fen):
        """Both directions preserve placement, side to move and castling."""
        position = decode_fen(fen)
        board = position_to_chess_board(position)

        assert board.fen() == fen
        assert position_from_chess_board(board) == position
        assert encode_fen(position_from_chess_board(chess.Board(fen))) == fen

    def test_side_to_move(self):
        position = decode_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert position_to_chess_board(position).turn == chess.BLACK
        assert position_from_chess_board(chess.Board()).side_to_move is Color.WHITE

    def test_castling_rights(self):
        position = decode_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        board = position_to_chess_board(position)

        assert board.has_kingside_castling_rights(chess.WHITE)
        assert not board.has_queenside_castling_rights(chess.WHITE)
        assert not board.has_kingside_castling_rights(chess.BLACK)
        assert board.has_queenside_castling_rights(chess.BLACK)
        assert position_from_chess_board(board).castling == {
            CastlingRight.WHITE_KINGSIDE,
            CastlingRight.BLACK_QUEENSIDE,
        }
