"""
Capture configuration.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, FrozenSet, Mapping

from chess_capture.board.model import ALL_CASTLING, NO_CASTLING, CastlingRight
from chess_capture.evaluation.normalizer import BAR_MAX, BAR_MIN, EVAL_COMPRESSION
from chess_capture.geometry.corners import DEFAULT_INSET
from chess_capture.geometry.mapper import FitPolicy

logger = logging.getLogger(__name__)


@dataclass
class CaptureConfig:
    """Configuration for corner editing, payload building and evaluation display.

    Defaults reproduce the reference behavior; change them only when the
    recognizer or UI is known to expect something else.
    """

    # Corners
    corner_inset: float = DEFAULT_INSET
    """Inset of the default corner quad (0.1 → corners at 10% / 90%)"""

    detection_fit: FitPolicy = FitPolicy.ASPECT_FIT
    """Fit policy of the live detection overlay"""

    editor_fit: FitPolicy = FitPolicy.ASPECT_FILL
    """Fit policy of the interactive corner editor"""

    # Recognizer payload
    integer_pixels: bool = True
    """Truncate pixel corners to integers (toward zero) in the payload"""

    # FEN decoding
    default_castling: str = "none"
    """Castling rights assumed when a FEN has no castling field: 'none' or 'all'"""

    # Evaluation bar
    eval_compression: float = EVAL_COMPRESSION
    """Pawn advantage that saturates the evaluation bar"""

    bar_min: float = BAR_MIN
    """Lowest bar fraction (Black mating)"""

    bar_max: float = BAR_MAX
    """Highest bar fraction (White mating)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.detection_fit = FitPolicy(self.detection_fit)
        self.editor_fit = FitPolicy(self.editor_fit)

        if not 0.0 <= self.corner_inset < 0.5:
            raise ValueError(f"corner_inset must be in [0, 0.5), got {self.corner_inset}")

        if self.default_castling not in ("none", "all"):
            raise ValueError(
                f"default_castling should be 'none' or 'all', got {self.default_castling!r}"
            )

        if self.eval_compression <= 0:
            raise ValueError(f"eval_compression must be positive, got {self.eval_compression}")

        if not 0.0 <= self.bar_min < 0.5 < self.bar_max <= 1.0:
            raise ValueError(
                f"bar bounds must satisfy 0 <= bar_min < 0.5 < bar_max <= 1, "
                f"got {self.bar_min}, {self.bar_max}"
            )

    @property
    def default_castling_rights(self) -> FrozenSet[CastlingRight]:
        return ALL_CASTLING if self.default_castling == "all" else NO_CASTLING

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "CaptureConfig":
        """
        Build a config from a mapping (e.g. a parsed JSON settings file).

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**values)

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"CaptureConfig(\n"
            f"  Corners: inset={self.corner_inset}, detection={self.detection_fit.value}, "
            f"editor={self.editor_fit.value}\n"
            f"  Payload: integer_pixels={self.integer_pixels}\n"
            f"  FEN: default_castling={self.default_castling}\n"
            f"  Bar: compression={self.eval_compression}, "
            f"bounds=[{self.bar_min}, {self.bar_max}]\n"
            f")"
        )
