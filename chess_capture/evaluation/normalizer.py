"""
Evaluation Normalizer

Maps an EvaluationResult onto the evaluation bar (fraction of the bar that
is White's) and onto the short text shown next to it.

Bar fraction:
    - missing / error   → 0.5
    - mate for White    → 0.95
    - mate for Black    → 0.05 (also mate 0, the side to move is mated)
    - score s (pawns)   → clamp(0.5 + (s / 10) / 2, 0.05, 0.95)

The divisor 10 makes a 10-pawn advantage saturate the bar.
"""

from typing import Optional

import numpy as np

from chess_capture.evaluation.base import EvaluationResult

EVAL_COMPRESSION = 10.0
BAR_MIN = 0.05
BAR_MAX = 0.95
BAR_NEUTRAL = 0.5


def evaluation_to_bar_fraction(
    result: Optional[EvaluationResult],
    compression: float = EVAL_COMPRESSION,
    bar_min: float = BAR_MIN,
    bar_max: float = BAR_MAX,
) -> float:
    """
    White's share of the evaluation bar.

    Args:
        result: Evaluation, or None if there is none yet
        compression: Pawn advantage that saturates the bar
        bar_min: Fraction shown when Black is winning outright
        bar_max: Fraction shown when White is winning outright

    Returns:
        Fraction in [bar_min, bar_max] (default [0.05, 0.95])
    """
    if result is None or result.is_error:
        return BAR_NEUTRAL

    if result.mate is not None:
        return bar_max if result.mate > 0 else bar_min

    if result.score is None or np.isnan(result.score):
        return BAR_NEUTRAL

    fraction = BAR_NEUTRAL + (result.score / compression) / 2.0
    return float(np.clip(fraction, bar_min, bar_max))


def evaluation_to_display_text(result: Optional[EvaluationResult]) -> str:
    """'M3' for a mate (unsigned), '1.5' / '-0.3' for a score, '0.0' otherwise."""
    if result is None:
        return "0.0"
    if result.mate is not None:
        return f"M{abs(result.mate)}"
    if result.score is not None:
        return f"{result.score:.1f}"
    return "0.0"
