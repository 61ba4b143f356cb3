"""
FEN Codec

Stateless conversion between Position and Forsyth-Edwards Notation.

Encoding is canonical: placement, side to move, castling rights in K,Q,k,q
order (or "-"), then the fixed suffix " - 0 1". En passant targets and move
counters are not tracked, so they are always written as the neutral
placeholder.

Decoding is deliberately permissive because FEN strings usually come from
the image recognizer and are not fully trusted:
    - never raises
    - digits advance the file cursor; squares past the h-file are dropped
    - unrecognized piece letters occupy a square but leave it empty
    - missing ranks stay empty, extra ranks are ignored
    - missing side to move defaults to white
    - missing castling field falls back to the caller's default

Round-trip:
    encode_fen(decode_fen(encode_fen(p))) == encode_fen(p)
"""

import logging
from typing import FrozenSet, Iterable, List

from chess_capture.board.model import (
    BOARD_SIZE,
    Board,
    CastlingRight,
    Color,
    NO_CASTLING,
    Piece,
    Position,
    Square,
)

logger = logging.getLogger(__name__)

STARTING_BOARD_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_FEN = f"{STARTING_BOARD_FEN} w KQkq - 0 1"
EMPTY_FEN = "8/8/8/8/8/8/8/8 w - - 0 1"

# En passant target and halfmove/fullmove counters are never tracked
FEN_SUFFIX = " - 0 1"

_DIGITS = "0123456789"


# ============================================================================
# Encoding
# ============================================================================


def encode_placement(board: Board) -> str:
    """
    Encode the piece-placement field.

    Args:
        board: Board to encode

    Returns:
        Placement string, e.g. "4k3/8/8/8/8/8/8/4K3"
    """
    ranks: List[str] = []
    for row in board.rows():
        rank_chars: List[str] = []
        empty_count = 0

        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                rank_chars.append(str(empty_count))
                empty_count = 0
            rank_chars.append(piece.symbol())

        if empty_count > 0:
            rank_chars.append(str(empty_count))

        ranks.append("".join(rank_chars))

    return "/".join(ranks)


def encode_castling(castling: Iterable[CastlingRight]) -> str:
    """Castling field in K,Q,k,q order, or "-" when there are none."""
    rights = set(castling)
    field = "".join(right.value for right in CastlingRight if right in rights)
    return field or "-"


def encode_fen(position: Position) -> str:
    """
    Encode a position as a full FEN string.

    Args:
        position: Position to encode

    Returns:
        FEN string, e.g. "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
    """
    return (
        f"{encode_placement(position.board)} "
        f"{position.side_to_move.fen_char} "
        f"{encode_castling(position.castling)}"
        f"{FEN_SUFFIX}"
    )


# ============================================================================
# Decoding
# ============================================================================


def decode_placement(placement: str) -> Board:
    """
    Decode a piece-placement field into a board.

    Never raises; anything that cannot be placed is dropped.

    Args:
        placement: Placement string (ranks separated by "/")

    Returns:
        Board populated from the available ranks
    """
    board = Board.empty()
    ranks = placement.split("/")

    if len(ranks) != BOARD_SIZE:
        logger.debug(f"Placement has {len(ranks)} ranks (expected {BOARD_SIZE}): {placement!r}")

    for rank_index, rank in enumerate(ranks[:BOARD_SIZE]):
        file_index = 0
        for char in rank:
            if char in _DIGITS:
                file_index += int(char)
                continue

            piece = Piece.from_symbol(char)
            if piece is None:
                logger.debug(f"Skipping unrecognized piece letter {char!r} in rank {rank_index}")
            elif file_index < BOARD_SIZE:
                board.set_piece_at(Square(file_index, rank_index), piece)
            else:
                logger.debug(f"Dropping {char!r} past the h-file in rank {rank_index}")
            file_index += 1

    return board


def decode_side_to_move(field: str) -> Color:
    """'b' means black; anything else (including garbage) means white."""
    return Color.BLACK if field.lower() == "b" else Color.WHITE


def decode_castling(field: str) -> FrozenSet[CastlingRight]:
    """Parse a castling field, skipping unknown letters."""
    rights = set()
    for char in field:
        if char == "-":
            continue
        try:
            rights.add(CastlingRight(char))
        except ValueError:
            logger.debug(f"Skipping unknown castling letter {char!r}")
    return frozenset(rights)


def decode_fen(
    fen: str,
    default_castling: Iterable[CastlingRight] = NO_CASTLING,
) -> Position:
    """
    Decode a FEN string into a position.

    Only the placement, side-to-move and castling fields are read. The
    decoder never raises: a malformed or partial string yields a partially
    populated (possibly empty) board.

    Args:
        fen: FEN string (full or placement-only)
        default_castling: Castling rights to use when the field is absent

    Returns:
        Decoded Position
    """
    fields = fen.split()
    if not fields:
        logger.debug("Empty FEN, returning empty position")
        return Position(Board.empty(), Color.WHITE, frozenset(default_castling))

    board = decode_placement(fields[0])
    side_to_move = decode_side_to_move(fields[1]) if len(fields) > 1 else Color.WHITE
    castling = decode_castling(fields[2]) if len(fields) > 2 else frozenset(default_castling)

    return Position(board, side_to_move, castling)


def normalize_fen(fen: str, default_castling: Iterable[CastlingRight] = NO_CASTLING) -> str:
    """Decode then re-encode, producing the canonical form of a FEN."""
    return encode_fen(decode_fen(fen, default_castling=default_castling))
