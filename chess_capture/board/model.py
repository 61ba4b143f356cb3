"""
Board Grid Model

This module defines the in-memory position used by every other part of the
package: pieces, squares, the 8x8 board and the full position (board, side to
move, castling rights).

Board Orientation:
    - Rank 0 = FEN's first (top) rank, i.e. chess rank 8
    - Rank 7 = chess rank 1 (White's back rank)
    - File 0 = A-file
    - File 7 = H-file

Squares are stored in a dense 64-slot list, rank-major and file-minor, so
iteration order always matches FEN placement order.

Piece kinds and colors reuse python-chess's constants, which keeps the model
directly convertible to chess.Board (see representation.py).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import FrozenSet, Iterator, List, NamedTuple, Optional, Tuple

import chess

logger = logging.getLogger(__name__)

BOARD_SIZE = 8
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE


class Color(Enum):
    """Piece color / side to move."""
    WHITE = chess.WHITE
    BLACK = chess.BLACK

    @property
    def other(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def fen_char(self) -> str:
        """Side-to-move token used in FEN ('w' or 'b')."""
        return "w" if self is Color.WHITE else "b"


class PieceKind(IntEnum):
    """Piece kind. Values match python-chess piece types (PAWN=1 ... KING=6)."""
    PAWN = chess.PAWN
    KNIGHT = chess.KNIGHT
    BISHOP = chess.BISHOP
    ROOK = chess.ROOK
    QUEEN = chess.QUEEN
    KING = chess.KING

    @property
    def symbol(self) -> str:
        """Lowercase FEN letter for this kind."""
        return _KIND_TO_SYMBOL[self]


# Enum-indexed symbol table (exhaustive over PieceKind)
_KIND_TO_SYMBOL = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
_SYMBOL_TO_KIND = {symbol: kind for kind, symbol in _KIND_TO_SYMBOL.items()}


@dataclass(frozen=True)
class Piece:
    """
    A chess piece (kind + color).

    Immutable value type; two pieces are equal when kind and color match.
    """
    kind: PieceKind
    color: Color

    def symbol(self) -> str:
        """FEN letter: uppercase for white, lowercase for black."""
        letter = self.kind.symbol
        return letter.upper() if self.color is Color.WHITE else letter

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Piece"]:
        """
        Parse a single FEN piece letter.

        Args:
            symbol: One character, e.g. "K" or "p"

        Returns:
            Piece, or None if the letter is not a recognized piece
        """
        kind = _SYMBOL_TO_KIND.get(symbol.lower())
        if kind is None:
            return None
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(kind, color)

    def __str__(self) -> str:
        return self.symbol()


class Square(NamedTuple):
    """
    Board coordinate.

    Attributes:
        file: 0-7, 0 = A-file
        rank: 0-7, 0 = FEN top rank (chess rank 8)
    """
    file: int
    rank: int

    @property
    def index(self) -> int:
        """Dense index (rank-major, file-minor), 0 = a8, 63 = h1."""
        return self.rank * BOARD_SIZE + self.file

    @classmethod
    def from_index(cls, index: int) -> "Square":
        if not 0 <= index < NUM_SQUARES:
            raise ValueError(f"Square index out of range: {index}")
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    @property
    def name(self) -> str:
        """Algebraic name, e.g. Square(4, 7).name == 'e1'."""
        return chess.FILE_NAMES[self.file] + str(BOARD_SIZE - self.rank)

    @classmethod
    def from_name(cls, name: str) -> "Square":
        """Parse an algebraic square name ('a8' -> Square(0, 0))."""
        if len(name) != 2 or name[0] not in chess.FILE_NAMES or name[1] not in chess.RANK_NAMES:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(chess.FILE_NAMES.index(name[0]), BOARD_SIZE - int(name[1]))

    def is_valid(self) -> bool:
        return 0 <= self.file < BOARD_SIZE and 0 <= self.rank < BOARD_SIZE


SQUARES: Tuple[Square, ...] = tuple(Square.from_index(i) for i in range(NUM_SQUARES))


class Board:
    """
    Dense 8x8 grid of optional pieces.

    Exactly 64 addressable squares. No invariant is enforced on piece
    counts: a board may hold zero or several kings while being edited.
    """

    def __init__(self, squares: Optional[List[Optional[Piece]]] = None):
        if squares is None:
            squares = [None] * NUM_SQUARES
        elif len(squares) != NUM_SQUARES:
            raise ValueError(f"Board needs {NUM_SQUARES} squares, got {len(squares)}")
        self._squares: List[Optional[Piece]] = list(squares)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def starting(cls) -> "Board":
        """Standard initial setup."""
        board = cls()
        back_rank = [
            PieceKind.ROOK, PieceKind.KNIGHT, PieceKind.BISHOP, PieceKind.QUEEN,
            PieceKind.KING, PieceKind.BISHOP, PieceKind.KNIGHT, PieceKind.ROOK,
        ]
        for file, kind in enumerate(back_rank):
            board.set_piece_at(Square(file, 0), Piece(kind, Color.BLACK))
            board.set_piece_at(Square(file, 1), Piece(PieceKind.PAWN, Color.BLACK))
            board.set_piece_at(Square(file, 6), Piece(PieceKind.PAWN, Color.WHITE))
            board.set_piece_at(Square(file, 7), Piece(kind, Color.WHITE))
        return board

    @staticmethod
    def _index(square: Square) -> int:
        square = Square(*square)
        if not square.is_valid():
            raise ValueError(f"Square out of range: {square}")
        return square.index

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self._squares[self._index(square)]

    def set_piece_at(self, square: Square, piece: Optional[Piece]) -> None:
        self._squares[self._index(square)] = piece

    def remove_piece_at(self, square: Square) -> Optional[Piece]:
        """Empty a square, returning whatever stood there."""
        piece = self.piece_at(square)
        self.set_piece_at(square, None)
        return piece

    def clear(self) -> None:
        self._squares = [None] * NUM_SQUARES

    def copy(self) -> "Board":
        return Board(self._squares)

    def pieces(self) -> Iterator[Tuple[Square, Piece]]:
        """Yield (square, piece) for occupied squares in FEN order."""
        for square, piece in zip(SQUARES, self._squares):
            if piece is not None:
                yield square, piece

    def rows(self) -> List[List[Optional[Piece]]]:
        """8x8 nested-list view, rows[rank][file]."""
        return [
            self._squares[rank * BOARD_SIZE:(rank + 1) * BOARD_SIZE]
            for rank in range(BOARD_SIZE)
        ]

    def ascii(self) -> str:
        """Text diagram, top rank first, '.' for empty squares."""
        return "\n".join(
            " ".join(piece.symbol() if piece else "." for piece in row)
            for row in self.rows()
        )

    def __iter__(self) -> Iterator[Optional[Piece]]:
        return iter(self._squares)

    def __len__(self) -> int:
        return NUM_SQUARES

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return f"Board({len(list(self.pieces()))} pieces)"


class CastlingRight(Enum):
    """Castling rights, declared in canonical FEN order (K, Q, k, q)."""
    WHITE_KINGSIDE = "K"
    WHITE_QUEENSIDE = "Q"
    BLACK_KINGSIDE = "k"
    BLACK_QUEENSIDE = "q"


ALL_CASTLING: FrozenSet[CastlingRight] = frozenset(CastlingRight)
NO_CASTLING: FrozenSet[CastlingRight] = frozenset()


@dataclass
class Position:
    """
    Board + side to move + castling rights.

    The FEN of a position is always derived from these three fields via
    fen(); it is never stored.
    """
    board: Board = field(default_factory=Board.empty)
    side_to_move: Color = Color.WHITE
    castling: FrozenSet[CastlingRight] = NO_CASTLING

    def __post_init__(self):
        self.castling = frozenset(self.castling)

    @classmethod
    def starting(cls) -> "Position":
        return cls(Board.starting(), Color.WHITE, ALL_CASTLING)

    @classmethod
    def empty(cls) -> "Position":
        return cls(Board.empty(), Color.WHITE, NO_CASTLING)

    def fen(self) -> str:
        # Imported here: fen.py depends on this module
        from chess_capture.board.fen import encode_fen
        return encode_fen(self)

    def copy(self) -> "Position":
        return Position(self.board.copy(), self.side_to_move, self.castling)


# ============================================================================
# King-count gate
# ============================================================================


def count_kings(board: Board) -> Tuple[int, int]:
    """
    Count kings on the board.

    Args:
        board: Board to inspect

    Returns:
        Tuple of (white_kings, black_kings)
    """
    white = black = 0
    for _, piece in board.pieces():
        if piece.kind is PieceKind.KING:
            if piece.color is Color.WHITE:
                white += 1
            else:
                black += 1
    return white, black


def _king_diagnostic(count: int, color_name: str) -> Optional[str]:
    if count == 0:
        return f"missing {color_name} king"
    if count > 1:
        return f"{count} {color_name} kings (need exactly 1)"
    return None


def king_count_errors(board: Board) -> List[str]:
    """Per-color king diagnostics; empty when there is exactly one of each."""
    white, black = count_kings(board)
    errors = [
        _king_diagnostic(white, "white"),
        _king_diagnostic(black, "black"),
    ]
    return [error for error in errors if error is not None]


def validate_for_evaluation(board: Board) -> Optional[str]:
    """
    Check the precondition for requesting an evaluation.

    An evaluator needs exactly one king of each color. This does not raise:
    the returned message is meant to be shown to the user as-is.

    Args:
        board: Board about to be evaluated

    Returns:
        None if the board can be evaluated, otherwise a message such as
        "Invalid position: missing white king, 2 black kings (need exactly 1)"
    """
    errors = king_count_errors(board)
    if not errors:
        return None
    message = "Invalid position: " + ", ".join(errors)
    logger.debug(message)
    return message
