"""
Recognizer corner payload.

Builds the pixel-space corner description that accompanies an image sent to
the position recognizer. The HTTP request itself lives outside this package.

Integer coordinates are truncated toward zero, never rounded.
"""

import logging
from typing import Any, Dict, List, Union

import numpy as np

from chess_capture.geometry.corners import CornerSet
from chess_capture.geometry.mapper import normalized_to_pixel, truncate_pixel

logger = logging.getLogger(__name__)

Number = Union[int, float]


def corners_to_pixels(
    corners: CornerSet,
    image_width: int,
    image_height: int,
    integer: bool = True,
) -> List[List[Number]]:
    """
    Convert a corner set to pixel coordinates.

    Args:
        corners: Normalized corner set
        image_width: Source image width in pixels
        image_height: Source image height in pixels
        integer: Truncate to int (default) or keep floats

    Returns:
        Four [x, y] pairs in canonical order (TL, TR, BR, BL)
    """
    pixels = []
    for corner in corners:
        point = normalized_to_pixel(corner, image_width, image_height)
        if integer:
            pixels.append(list(truncate_pixel(point)))
        else:
            pixels.append([float(point.x), float(point.y)])
    return pixels


def build_corner_payload(
    corners: CornerSet,
    image_width: int,
    image_height: int,
    integer: bool = True,
) -> Dict[str, Any]:
    """
    JSON-ready corner payload for the recognizer.

    Returns:
        {"corners": [[x, y] x4], "image_width": w, "image_height": h}
    """
    payload = {
        "corners": corners_to_pixels(corners, image_width, image_height, integer=integer),
        "image_width": int(image_width),
        "image_height": int(image_height),
    }
    logger.debug(f"Corner payload: {payload['corners']} on {image_width}x{image_height}")
    return payload


def pixel_corners_array(corners: CornerSet, image_width: int, image_height: int) -> np.ndarray:
    """Float (4, 2) pixel array, e.g. as source points for a perspective warp."""
    return corners.as_array() * np.array([image_width, image_height], dtype=np.float64)
