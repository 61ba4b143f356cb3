"""
Unit Tests for the Board Grid Model

Tests for pieces, squares, the 8x8 board and the king-count gate:
    - Rank 0 = FEN top rank indexing
    - Dense 64-square storage
    - King diagnostics used before evaluation
"""

import pytest

from chess_capture.board.model import (
    ALL_CASTLING,
    NO_CASTLING,
    Board,
    Color,
    Piece,
    PieceKind,
    Position,
    Square,
    count_kings,
    king_count_errors,
    validate_for_evaluation,
)

WHITE_KING = Piece(PieceKind.KING, Color.WHITE)
BLACK_KING = Piece(PieceKind.KING, Color.BLACK)


class TestPiece:
    """Tests for Piece."""

    def test_structural_equality(self):
        """Pieces with the same kind and color are equal and hash alike."""
        assert Piece(PieceKind.ROOK, Color.BLACK) == Piece(PieceKind.ROOK, Color.BLACK)
        assert len({WHITE_KING, Piece(PieceKind.KING, Color.WHITE)}) == 1
        assert WHITE_KING != BLACK_KING

    @pytest.mark.parametrize("symbol,kind,color", [
        ("K", PieceKind.KING, Color.WHITE),
        ("q", PieceKind.QUEEN, Color.BLACK),
        ("R", PieceKind.ROOK, Color.WHITE),
        ("b", PieceKind.BISHOP, Color.BLACK),
        ("N", PieceKind.KNIGHT, Color.WHITE),
        ("p", PieceKind.PAWN, Color.BLACK),
    ])
    def test_symbols(self, symbol, kind, color):
        """Test symbol parsing and formatting in both directions."""
        piece = Piece.from_symbol(symbol)
        assert piece == Piece(kind, color)
        assert piece.symbol() == symbol

    def test_unknown_symbol(self):
        assert Piece.from_symbol("x") is None
        assert Piece.from_symbol("?") is None

    def test_kind_values_match_python_chess(self):
        """Piece kinds reuse python-chess piece type numbers."""
        import chess

        assert PieceKind.PAWN == chess.PAWN
        assert PieceKind.KING == chess.KING
        assert Color.WHITE.value is chess.WHITE


class TestSquare:
    """Tests for Square indexing."""

    def test_rank_zero_is_top(self):
        """Rank 0 is chess rank 8, file 0 is the a-file."""
        assert Square(0, 0).name == "a8"
        assert Square(7, 7).name == "h1"
        assert Square(4, 7).name == "e1"

    def test_from_name(self):
        assert Square.from_name("e4") == Square(4, 4)
        assert Square.from_name("a8") == Square(0, 0)

    def test_from_name_invalid(self):
        with pytest.raises(ValueError):
            Square.from_name("i9")

    def test_index_round_trip(self):
        """Index is rank-major, file-minor."""
        assert Square(0, 0).index == 0
        assert Square(7, 0).index == 7
        assert Square(0, 1).index == 8
        for index in range(64):
            assert Square.from_index(index).index == index

    def test_from_index_out_of_range(self):
        with pytest.raises(ValueError):
            Square.from_index(64)


class TestBoard:
    """Tests for Board."""

    def test_empty_board(self):
        board = Board.empty()
        assert len(board) == 64
        assert all(piece is None for piece in board)
        assert list(board.pieces()) == []

    def test_starting_board(self):
        """Black back rank on rank 0, white back rank on rank 7."""
        board = Board.starting()
        assert board.piece_at(Square(4, 0)) == BLACK_KING
        assert board.piece_at(Square(4, 7)) == WHITE_KING
        assert board.piece_at(Square(3, 7)) == Piece(PieceKind.QUEEN, Color.WHITE)
        assert board.piece_at(Square(0, 1)) == Piece(PieceKind.PAWN, Color.BLACK)
        assert board.piece_at(Square(0, 6)) == Piece(PieceKind.PAWN, Color.WHITE)
        assert len(list(board.pieces())) == 32

    def test_set_and_remove(self):
        board = Board.empty()
        board.set_piece_at(Square(2, 3), WHITE_KING)
        assert board.piece_at(Square(2, 3)) == WHITE_KING

        removed = board.remove_piece_at(Square(2, 3))
        assert removed == WHITE_KING
        assert board.piece_at(Square(2, 3)) is None

    def test_out_of_range_square_raises(self):
        board = Board.empty()
        with pytest.raises(ValueError):
            board.set_piece_at(Square(8, 0), WHITE_KING)
        with pytest.raises(ValueError):
            board.piece_at(Square(0, -1))

    def test_wrong_square_count_raises(self):
        with pytest.raises(ValueError):
            Board([None] * 63)

    def test_copy_is_independent(self):
        board = Board.starting()
        clone = board.copy()
        clone.clear()

        assert board == Board.starting()
        assert clone == Board.empty()

    def test_no_piece_count_invariant(self):
        """Boards may hold any number of kings while being edited."""
        board = Board.empty()
        for file in range(3):
            board.set_piece_at(Square(file, 0), WHITE_KING)
        assert count_kings(board) == (3, 0)

    def test_rows_layout(self):
        rows = Board.starting().rows()
        assert len(rows) == 8
        assert all(len(row) == 8 for row in rows)
        assert rows[0][4] == BLACK_KING

    def test_ascii(self):
        lines = Board.starting().ascii().splitlines()
        assert lines[0] == "r n b q k b n r"
        assert lines[4] == ". . . . . . . ."
        assert lines[7] == "R N B Q K B N R"


class TestPosition:
    """Tests for Position."""

    def test_starting_position(self):
        position = Position.starting()
        assert position.side_to_move is Color.WHITE
        assert position.castling == ALL_CASTLING

    def test_empty_position(self):
        position = Position.empty()
        assert position.board == Board.empty()
        assert position.castling == NO_CASTLING

    def test_fen_is_derived(self):
        """fen() follows every mutation."""
        position = Position.starting()
        before = position.fen()
        position.board.remove_piece_at(Square.from_name("a1"))
        assert position.fen() != before
        assert position.fen().startswith("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/1NBQKBNR")

    def test_copy(self):
        position = Position.starting()
        clone = position.copy()
        clone.board.clear()
        assert position == Position.starting()


class TestKingGate:
    """Tests for the king-count precondition."""

    def test_count_kings_starting(self):
        assert count_kings(Board.starting()) == (1, 1)

    def test_count_kings_empty(self):
        assert count_kings(Board.empty()) == (0, 0)

    def test_valid_board_passes(self):
        assert validate_for_evaluation(Board.starting()) is None
        assert king_count_errors(Board.starting()) == []

    def test_missing_white_king(self):
        board = Board.empty()
        board.set_piece_at(Square(4, 0), BLACK_KING)
        assert validate_for_evaluation(board) == "Invalid position: missing white king"

    def test_missing_both_kings(self):
        assert validate_for_evaluation(Board.empty()) == (
            "Invalid position: missing white king, missing black king"
        )

    def test_extra_kings(self):
        """Diagnostics from both colors are concatenated."""
        board = Board.empty()
        board.set_piece_at(Square(0, 0), BLACK_KING)
        board.set_piece_at(Square(1, 0), BLACK_KING)
        assert validate_for_evaluation(board) == (
            "Invalid position: missing white king, 2 black kings (need exactly 1)"
        )

    def test_extra_white_kings_only(self):
        board = Board.empty()
        board.set_piece_at(Square(0, 7), WHITE_KING)
        board.set_piece_at(Square(1, 7), WHITE_KING)
        board.set_piece_at(Square(4, 0), BLACK_KING)
        assert king_count_errors(board) == ["2 white kings (need exactly 1)"]
