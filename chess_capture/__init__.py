"""
Chess Capture

Board-position model and corner-geometry core for turning a photographed
chessboard into a FEN string, editing it, and displaying an evaluation.

## Architecture

The package is organized into several key modules:

1. **board**: Board grid model and FEN codec
   - 8x8 dense grid of optional pieces (rank 0 = FEN top rank)
   - Tolerant FEN decoding, canonical FEN encoding
   - King-count gate used before requesting an evaluation

2. **geometry**: Corner set and coordinate mapping
   - Four user-adjustable corners in normalized image space
   - Normalized <-> pixel <-> view transforms (aspect-fit / aspect-fill)
   - Pixel-space corner payload for the recognizer

3. **evaluation**: Evaluation normalizer
   - Score / mate / error results
   - Evaluation bar fraction and display text

4. **editor**: Explicit editor session state and transitions

## Quick Start

```python
from chess_capture.board import decode_fen, encode_fen
from chess_capture.geometry import CornerSet, build_corner_payload

position = decode_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
print(encode_fen(position))

payload = build_corner_payload(CornerSet.default(), 4032, 3024)
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_capture.board import Position, decode_fen, encode_fen
from chess_capture.evaluation import (
    EvaluationResult,
    evaluation_to_bar_fraction,
    evaluation_to_display_text,
)
from chess_capture.geometry import CornerSet, FitPolicy

__all__ = [
    'Position',
    'decode_fen',
    'encode_fen',
    'EvaluationResult',
    'evaluation_to_bar_fraction',
    'evaluation_to_display_text',
    'CornerSet',
    'FitPolicy',
]
