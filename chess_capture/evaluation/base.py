"""
Evaluation Results and Evaluator Interface

This module defines the value returned by a position evaluator and the
abstract interface an evaluator client implements. The actual evaluator is
an external service; this package only gates requests and formats results.

Key Principles:
    1. Scores are in pawns (not centipawns), from White's perspective
    2. Positive = White advantage, Negative = Black advantage
    3. A result holds a score OR a mate count OR an error, never more
       than one of them
    4. Mate counts are signed: +N means White mates in N

Convention:
    - eval 1.5   → White is 1.5 pawns better
    - mate -2    → Black mates in 2
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from chess_capture.board.fen import decode_fen
from chess_capture.board.model import validate_for_evaluation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of evaluating a position.

    Attributes:
        score: Evaluation in pawns (White-positive), if no forced mate
        mate: Signed mate-in-N count, if a forced mate was found
        error: Error text if the evaluation failed
    """
    score: Optional[float] = None
    mate: Optional[int] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.score is not None and self.mate is not None:
            raise ValueError("An evaluation cannot carry both a score and a mate count")
        if self.error is not None and (self.score is not None or self.mate is not None):
            raise ValueError("A failed evaluation cannot carry a score or mate count")

    @classmethod
    def from_score(cls, score: float) -> "EvaluationResult":
        return cls(score=float(score))

    @classmethod
    def from_mate(cls, mate: int) -> "EvaluationResult":
        return cls(mate=int(mate))

    @classmethod
    def from_error(cls, error: str) -> "EvaluationResult":
        return cls(error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_api_response(cls, response: Mapping[str, Any]) -> "EvaluationResult":
        """
        Build a result from an already-parsed evaluator response.

        Accepted keys:
            type:  "error" marks a failed evaluation
            text / error: error description
            eval:  pawn score
            mate:  int or numeric string; takes precedence over eval

        Args:
            response: Decoded JSON object from the evaluator

        Returns:
            EvaluationResult
        """
        if response.get("type") == "error":
            message = response.get("text") or response.get("error") or "Invalid position"
            return cls.from_error(str(message))

        mate = _parse_mate(response.get("mate"))
        if mate is not None:
            return cls.from_mate(mate)

        score = response.get("eval")
        if score is None:
            return cls()
        try:
            score = float(score)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric eval value: {score!r}")
            return cls()
        if not math.isfinite(score):
            logger.warning(f"Ignoring non-finite eval value: {score!r}")
            return cls()
        return cls.from_score(score)


def _parse_mate(value: Any) -> Optional[int]:
    """Mate count may arrive as an int or a string; anything else is ignored."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        logger.debug(f"Ignoring non-numeric mate value: {value!r}")
        return None


class Evaluator(ABC):
    """
    Abstract base class for evaluator clients.

    Implementations wrap whatever service actually evaluates a FEN.
    Callers should use evaluate_checked(), which applies the king-count
    precondition before calling out.
    """

    @abstractmethod
    def evaluate(self, fen: str) -> EvaluationResult:
        """
        Evaluate a position.

        Args:
            fen: Full FEN string

        Returns:
            EvaluationResult
        """
        pass

    def evaluate_checked(self, fen: str) -> EvaluationResult:
        """
        Evaluate only if the position has exactly one king of each color.

        Returns:
            The evaluator's result, or an error result carrying the
            user-facing king diagnostic (the evaluator is not called)
        """
        message = validate_for_evaluation(decode_fen(fen).board)
        if message is not None:
            logger.info(f"Not evaluating {fen}: {message}")
            return EvaluationResult.from_error(message)
        return self.evaluate(fen)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
