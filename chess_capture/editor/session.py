"""
Editor Session

Explicit state for one capture/edit session, with the transitions the UI
drives: placing and removing pieces, toggling side to move and castling
rights, flipping the view, dragging corners and requesting evaluations.

The FEN is never stored; current_fen is regenerated from the position every
time it is read. last_evaluated_fen is what lets repeated requests for an
unchanged position be skipped.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from chess_capture.board.fen import decode_fen, encode_fen
from chess_capture.board.model import (
    BOARD_SIZE,
    CastlingRight,
    Piece,
    Position,
    Square,
    validate_for_evaluation,
)
from chess_capture.config import CaptureConfig
from chess_capture.evaluation.base import EvaluationResult, Evaluator
from chess_capture.evaluation.normalizer import (
    evaluation_to_bar_fraction,
    evaluation_to_display_text,
)
from chess_capture.geometry import corners as corner_ops
from chess_capture.geometry.corners import Corner, CornerSet
from chess_capture.geometry.mapper import Point, PointLike, SizeLike, normalized_to_view
from chess_capture.geometry.payload import build_corner_payload

logger = logging.getLogger(__name__)


class Tool(Enum):
    """Palette entries that are not pieces."""
    DELETE = "delete"


PaletteSelection = Union[Piece, Tool]


@dataclass
class EditorSession:
    """
    State of a single capture/edit session.

    Attributes:
        position: Board being edited
        corners: Board outline in normalized image space
        selection: Palette piece (or delete tool) applied on tap
        selected_square: Board square picked for removal
        flipped: View shows the board from Black's side
        evaluation: Last successful evaluation
        position_error: Message shown instead of an evaluation
        last_evaluated_fen: FEN of the last completed evaluation request
    """
    config: CaptureConfig = field(default_factory=CaptureConfig)
    position: Position = field(default_factory=Position.starting)
    corners: Optional[CornerSet] = None
    selection: Optional[PaletteSelection] = None
    selected_square: Optional[Square] = None
    flipped: bool = False
    evaluation: Optional[EvaluationResult] = None
    position_error: Optional[str] = None
    last_evaluated_fen: Optional[str] = None

    def __post_init__(self):
        if self.corners is None:
            self.corners = CornerSet.default(self.config.corner_inset)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def current_fen(self) -> str:
        return encode_fen(self.position)

    @property
    def bar_fraction(self) -> float:
        return evaluation_to_bar_fraction(
            self.evaluation,
            compression=self.config.eval_compression,
            bar_min=self.config.bar_min,
            bar_max=self.config.bar_max,
        )

    @property
    def evaluation_text(self) -> str:
        return evaluation_to_display_text(self.evaluation)

    # ------------------------------------------------------------------
    # Board editing
    # ------------------------------------------------------------------

    def display_square(self, row: int, col: int) -> Square:
        """Board square shown at a display (row, col), honoring flip."""
        if self.flipped:
            return Square(BOARD_SIZE - 1 - col, BOARD_SIZE - 1 - row)
        return Square(col, row)

    def select_palette(self, selection: Optional[PaletteSelection]) -> None:
        self.selection = selection
        self.selected_square = None

    def tap_square(self, square: Square) -> None:
        """
        Handle a tap on a board square.

        With a palette selection the tap places that piece (or deletes with
        the delete tool). Otherwise it selects an occupied square, or
        cancels the selection on an empty one.
        """
        square = Square(*square)
        if self.selection is Tool.DELETE:
            self.position.board.remove_piece_at(square)
            logger.debug(f"Deleted piece at {square.name}")
        elif self.selection is not None:
            self.position.board.set_piece_at(square, self.selection)
            logger.debug(f"Placed {self.selection} at {square.name}")
        elif self.position.board.piece_at(square) is not None:
            self.selected_square = square
        else:
            self.selected_square = None

    def remove_selected(self) -> Optional[Piece]:
        """Remove the piece on the selected square, if any."""
        if self.selected_square is None:
            return None
        piece = self.position.board.remove_piece_at(self.selected_square)
        self.selected_square = None
        return piece

    def set_start_position(self) -> None:
        self.position = Position.starting()
        self.selected_square = None

    def clear_board(self) -> None:
        self.position.board.clear()
        self.selected_square = None
        self.evaluation = None

    def load_fen(self, fen: str) -> None:
        """Replace the position with a decoded FEN (e.g. from the recognizer)."""
        self.position = decode_fen(fen, default_castling=self.config.default_castling_rights)
        self.selected_square = None
        logger.info(f"Loaded position {self.current_fen}")

    def toggle_side_to_move(self) -> None:
        self.position.side_to_move = self.position.side_to_move.other

    def toggle_castling(self, right: CastlingRight) -> None:
        self.position.castling = self.position.castling ^ {right}

    def flip_board(self) -> None:
        self.flipped = not self.flipped

    # ------------------------------------------------------------------
    # Corners
    # ------------------------------------------------------------------

    def reset_corners(self) -> None:
        """Seed the default inset quad for a newly captured photo."""
        self.corners = CornerSet.default(self.config.corner_inset)

    def drag_corner(
        self,
        index: Union[int, Corner],
        view_point: PointLike,
        view_size: SizeLike,
        image_size: SizeLike,
    ) -> None:
        self.corners = corner_ops.drag_corner(
            self.corners, index, view_point, view_size, image_size, fit=self.config.editor_fit,
        )

    def overlay_points(self, view_size: SizeLike, image_size: SizeLike) -> List[Point]:
        """
        Corners in view coordinates for drawing the live detection overlay.

        The overlay shows the whole frame, so it uses config.detection_fit
        rather than the editor's fit policy.
        """
        return [
            normalized_to_view(point, view_size, image_size, self.config.detection_fit)
            for point in self.corners
        ]

    def corner_payload(self, image_width: int, image_height: int) -> dict:
        return build_corner_payload(
            self.corners, image_width, image_height, integer=self.config.integer_pixels,
        )

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluation_gate(self) -> Optional[str]:
        """King-count diagnostic for the current board, or None if it can be evaluated."""
        return validate_for_evaluation(self.position.board)

    def needs_evaluation(self) -> bool:
        return self.current_fen != self.last_evaluated_fen

    def request_evaluation(self, evaluator: Evaluator) -> Tuple[Optional[EvaluationResult], Optional[str]]:
        """
        Evaluate the current position unless it was already evaluated.

        A failed king-count gate or an evaluator error is recorded as
        position_error and the FEN is marked as evaluated, so it is not
        retried until the position changes. Exceptions from the evaluator
        propagate and leave the FEN unmarked.

        Args:
            evaluator: Evaluator client

        Returns:
            Tuple of (evaluation, position_error)
        """
        fen = self.current_fen
        if not self.needs_evaluation():
            logger.debug(f"Skipping evaluation, unchanged FEN: {fen}")
            return self.evaluation, self.position_error

        result = evaluator.evaluate_checked(fen)
        if result.is_error:
            self.evaluation = None
            self.position_error = result.error
        else:
            self.evaluation = result
            self.position_error = None

        self.last_evaluated_fen = fen
        return self.evaluation, self.position_error
