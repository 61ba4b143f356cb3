"""
Tests for the editor session.
"""

import pytest

from chess_capture.board.fen import STARTING_FEN
from chess_capture.board.model import (
    ALL_CASTLING,
    Board,
    CastlingRight,
    Color,
    Piece,
    PieceKind,
    Square,
)
from chess_capture.config import CaptureConfig
from chess_capture.editor import EditorSession, Tool
from chess_capture.evaluation import EvaluationResult, Evaluator
from chess_capture.geometry import CornerSet, FitPolicy


class CountingEvaluator(Evaluator):
    """Evaluator stub that counts calls."""

    def __init__(self, result=None):
        self.result = result or EvaluationResult.from_score(5.0)
        self.calls = []

    def evaluate(self, fen):
        self.calls.append(fen)
        return self.result


class FailingEvaluator(Evaluator):
    def evaluate(self, fen):
        raise ConnectionError("evaluator unreachable")


@pytest.fixture
def session():
    """Fresh session on the starting position."""
    return EditorSession()


class TestBoardEditing:
    """Test piece placement and board-level transitions."""

    def test_initial_state(self, session):
        assert session.current_fen == STARTING_FEN
        assert session.corners == CornerSet.default()
        assert session.selection is None

    def test_place_piece(self, session):
        session.select_palette(Piece(PieceKind.QUEEN, Color.WHITE))
        session.tap_square(Square.from_name("e4"))

        assert session.current_fen == (
            "rnbqkbnr/pppppppp/8/8/4Q3/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
        )

    def test_delete_tool(self, session):
        session.select_palette(Tool.DELETE)
        session.tap_square(Square.from_name("e1"))

        assert session.position.board.piece_at(Square.from_name("e1")) is None
        assert session.evaluation_gate() == "Invalid position: missing white king"

    def test_select_then_remove(self, session):
        """Without a palette selection, tapping selects an occupied square."""
        session.tap_square(Square.from_name("d8"))
        assert session.selected_square == Square.from_name("d8")

        removed = session.remove_selected()
        assert removed == Piece(PieceKind.QUEEN, Color.BLACK)
        assert session.selected_square is None
        assert session.position.board.piece_at(Square.from_name("d8")) is None

    def test_tap_empty_cancels_selection(self, session):
        session.tap_square(Square.from_name("a1"))
        session.tap_square(Square.from_name("e4"))
        assert session.selected_square is None
        assert session.remove_selected() is None

    def test_clear_and_start(self, session):
        session.evaluation = EvaluationResult.from_score(1.0)
        session.clear_board()
        assert session.position.board == Board.empty()
        assert session.evaluation is None

        session.set_start_position()
        assert session.current_fen == STARTING_FEN

    def test_toggles(self, session):
        session.toggle_side_to_move()
        session.toggle_castling(CastlingRight.WHITE_KINGSIDE)
        assert session.current_fen.endswith(" b Qkq - 0 1")

        session.toggle_castling(CastlingRight.WHITE_KINGSIDE)
        assert session.position.castling == ALL_CASTLING

    def test_load_fen_defaults_to_no_castling(self, session):
        session.load_fen("4k3/8/8/8/8/8/8/4K3")
        assert session.current_fen == "4k3/8/8/8/8/8/8/4K3 w - - 0 1"

    def test_load_fen_with_all_castling_config(self):
        session = EditorSession(config=CaptureConfig(default_castling="all"))
        session.load_fen("r3k2r/8/8/8/8/8/8/R3K2R")
        assert session.current_fen == "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_display_square_flip(self, session):
        assert session.display_square(0, 0) == Square.from_name("a8")
        session.flip_board()
        assert session.display_square(0, 0) == Square.from_name("h1")
        assert session.display_square(7, 7) == Square.from_name("a8")


class TestCorners:
    """Test corner handling inside a session."""

    def test_drag_uses_editor_fill(self, session):
        session.drag_corner(2, (100, 200), (200, 400), (100, 100))
        assert session.corners[2] == (0.5, 0.5)
        for index in (0, 1, 3):
            assert session.corners[index] == CornerSet.default()[index]

    def test_drag_with_fit_config(self):
        session = EditorSession(config=CaptureConfig(editor_fit=FitPolicy.ASPECT_FIT))
        session.drag_corner(0, (0, 0), (200, 400), (100, 100))
        assert session.corners[0] == (0.0, 0.0)

    def test_reset_corners(self, session):
        session.drag_corner(1, (0, 0), (200, 400), (100, 100))
        session.reset_corners()
        assert session.corners == CornerSet.default()

    def test_corner_payload(self, session):
        payload = session.corner_payload(1000, 1000)
        assert payload["corners"] == [[100, 100], [900, 100], [900, 900], [100, 900]]

    def test_overlay_points_use_detection_fit(self, session):
        """The detection overlay letterboxes the whole frame (fit), unlike the editor."""
        points = session.overlay_points((200, 400), (100, 100))
        assert points[0] == pytest.approx((20.0, 120.0))
        assert points[2] == pytest.approx((180.0, 280.0))

    def test_overlay_points_follow_config(self):
        session = EditorSession(config=CaptureConfig(detection_fit=FitPolicy.ASPECT_FILL))
        points = session.overlay_points((200, 400), (100, 100))
        assert points[0] == pytest.approx((-60.0, 40.0))

    def test_custom_inset(self):
        session = EditorSession(config=CaptureConfig(corner_inset=0.25))
        assert session.corner_payload(100, 100)["corners"][0] == [25, 25]


class TestEvaluationRequests:
    """Test gating and de-duplication of evaluation requests."""

    def test_evaluates_once_per_fen(self, session):
        evaluator = CountingEvaluator()

        evaluation, error = session.request_evaluation(evaluator)
        assert evaluation == EvaluationResult.from_score(5.0)
        assert error is None
        assert session.bar_fraction == pytest.approx(0.75)
        assert session.evaluation_text == "5.0"

        session.request_evaluation(evaluator)
        assert len(evaluator.calls) == 1
        assert not session.needs_evaluation()

    def test_change_triggers_new_evaluation(self, session):
        evaluator = CountingEvaluator()
        session.request_evaluation(evaluator)

        session.toggle_side_to_move()
        assert session.needs_evaluation()
        session.request_evaluation(evaluator)
        assert evaluator.calls[-1].endswith(" b KQkq - 0 1")
        assert len(evaluator.calls) == 2

    def test_gate_failure_not_retried(self, session):
        evaluator = CountingEvaluator()
        session.evaluation = EvaluationResult.from_score(1.0)
        session.clear_board()

        evaluation, error = session.request_evaluation(evaluator)
        assert evaluation is None
        assert error == "Invalid position: missing white king, missing black king"
        assert evaluator.calls == []
        assert not session.needs_evaluation()
        assert session.bar_fraction == 0.5

    def test_evaluator_error_recorded(self, session):
        evaluator = CountingEvaluator(EvaluationResult.from_error("Invalid FEN"))
        evaluation, error = session.request_evaluation(evaluator)
        assert evaluation is None
        assert error == "Invalid FEN"

    def test_evaluator_exception_propagates(self, session):
        with pytest.raises(ConnectionError):
            session.request_evaluation(FailingEvaluator())
        assert session.needs_evaluation()

    def test_success_clears_previous_error(self, session):
        session.position_error = "Invalid position: missing white king"
        session.request_evaluation(CountingEvaluator())
        assert session.position_error is None
