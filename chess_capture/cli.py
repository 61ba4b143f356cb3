#!/usr/bin/env python3
"""
Command-line tools for the capture core.

Usage:
    python -m chess_capture fen decode "4k3/8/8/8/8/8/8/4K3 w - - 0 1"
    python -m chess_capture fen normalize "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
    python -m chess_capture fen validate "8/8/8/8/8/8/8/4K3 w - - 0 1"

    python -m chess_capture corners --width 4032 --height 3024 \\
        --corners 0.1,0.1 0.9,0.1 0.9,0.9 0.1,0.9

    python -m chess_capture eval --score 1.5
    python -m chess_capture eval --mate -2
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from chess_capture.board.fen import decode_fen, encode_castling, encode_fen
from chess_capture.board.model import validate_for_evaluation
from chess_capture.config import CaptureConfig
from chess_capture.evaluation.base import EvaluationResult
from chess_capture.evaluation.normalizer import (
    evaluation_to_bar_fraction,
    evaluation_to_display_text,
)
from chess_capture.geometry.corners import CornerSet
from chess_capture.geometry.payload import build_corner_payload

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_config(path: Optional[str]) -> CaptureConfig:
    """Load a JSON config file, or return the defaults."""
    if path is None:
        return CaptureConfig()
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r", encoding="utf-8") as f:
        config = CaptureConfig.from_dict(json.load(f))
    logger.info(f"Loaded config from {config_path}")
    return config


def parse_point(text: str) -> Tuple[float, float]:
    """Parse 'x,y' into a float pair (argparse type)."""
    try:
        x, y = (float(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected 'x,y', got {text!r}")
    return x, y


def fen_command(args, config: CaptureConfig) -> int:
    """Decode, normalize or validate a FEN."""
    position = decode_fen(args.fen, default_castling=config.default_castling_rights)

    if args.action == "decode":
        print(position.board.ascii())
        print(f"side to move: {position.side_to_move.name.lower()}")
        castling = encode_castling(position.castling)
        print(f"castling: {castling}")
        return 0

    if args.action == "normalize":
        print(encode_fen(position))
        return 0

    message = validate_for_evaluation(position.board)
    if message is not None:
        print(message)
        return 1
    print("OK")
    return 0


def corners_command(args, config: CaptureConfig) -> int:
    """Print the recognizer corner payload as JSON."""
    if args.corners is None:
        corners = CornerSet.default(config.corner_inset)
    elif len(args.corners) != 4:
        print(f"Error: expected 4 corners, got {len(args.corners)}")
        return 1
    else:
        corners = CornerSet(args.corners)

    integer = config.integer_pixels and not args.float
    payload = build_corner_payload(corners, args.width, args.height, integer=integer)
    print(json.dumps(payload))
    return 0


def eval_command(args, config: CaptureConfig) -> int:
    """Print bar fraction and display text for a score or mate."""
    if args.mate is not None:
        result = EvaluationResult.from_mate(args.mate)
    else:
        result = EvaluationResult.from_score(args.score)

    fraction = evaluation_to_bar_fraction(
        result,
        compression=config.eval_compression,
        bar_min=config.bar_min,
        bar_max=config.bar_max,
    )
    print(f"{evaluation_to_display_text(result)} {fraction:.3f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chess-capture",
        description="FEN, corner geometry and evaluation-bar tools",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config file (default: built-in settings)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    fen_parser = subparsers.add_parser("fen", help="Decode, normalize or validate a FEN")
    fen_parser.add_argument(
        "action",
        choices=["decode", "normalize", "validate"],
        help="What to do with the FEN",
    )
    fen_parser.add_argument("fen", help="FEN string (quote it)")

    corners_parser = subparsers.add_parser("corners", help="Build the recognizer corner payload")
    corners_parser.add_argument(
        "--width",
        type=int,
        required=True,
        help="Image width in pixels",
    )
    corners_parser.add_argument(
        "--height",
        type=int,
        required=True,
        help="Image height in pixels",
    )
    corners_parser.add_argument(
        "--corners",
        type=parse_point,
        nargs="+",
        default=None,
        help="Normalized corners TL TR BR BL as x,y (default: inset quad)",
    )
    corners_parser.add_argument(
        "--float",
        action="store_true",
        help="Keep fractional pixel coordinates",
    )

    eval_parser = subparsers.add_parser("eval", help="Format an evaluation")
    group = eval_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--score", type=float, help="Score in pawns (White-positive)")
    group.add_argument("--mate", type=int, help="Signed mate-in-N (positive: White mates)")

    return parser


COMMANDS = {
    "fen": fen_command,
    "corners": corners_command,
    "eval": eval_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(verbose=args.verbose)

    try:
        config = load_config(args.config)
        return COMMANDS[args.command](args, config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
