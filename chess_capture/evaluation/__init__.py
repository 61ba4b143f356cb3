"""
Evaluation Module

Formats evaluator output for display. Evaluation itself happens in an
external service behind the Evaluator interface.

Key Components:
    - EvaluationResult: score (pawns) / mate-in-N / error
    - Evaluator (ABC): client interface with the king-count gate
    - evaluation_to_bar_fraction: White's share of the evaluation bar
    - evaluation_to_display_text: "M3", "1.5", "0.0"

Data Flow:
    FEN → Evaluator.evaluate_checked() → EvaluationResult → bar fraction / text
"""

from chess_capture.evaluation.base import EvaluationResult, Evaluator
from chess_capture.evaluation.normalizer import (
    BAR_MAX,
    BAR_MIN,
    BAR_NEUTRAL,
    EVAL_COMPRESSION,
    evaluation_to_bar_fraction,
    evaluation_to_display_text,
)

__all__ = [
    'EvaluationResult',
    'Evaluator',
    'BAR_MAX',
    'BAR_MIN',
    'BAR_NEUTRAL',
    'EVAL_COMPRESSION',
    'evaluation_to_bar_fraction',
    'evaluation_to_display_text',
]
