"""
Geometry Module

Corner set and coordinate transforms between normalized image space, pixel
space and on-screen view space.

Key Components:
    - CornerSet: four clamped normalized corners (TL, TR, BR, BL)
    - drag_corner / nudge_corner: single-corner gesture updates
    - normalized_to_pixel / pixel_to_normalized / view_to_normalized /
      normalized_to_view: frame conversions
    - build_corner_payload: pixel corners for the recognizer

Data Flow:
    gesture (view) → view_to_normalized() → CornerSet → normalized_to_pixel() → recognizer
"""

from chess_capture.geometry.corners import (
    Corner,
    CornerSet,
    drag_corner,
    nudge_corner,
)
from chess_capture.geometry.mapper import (
    FitPolicy,
    Point,
    Size,
    ViewTransform,
    normalized_to_pixel,
    normalized_to_view,
    pixel_to_normalized,
    truncate_pixel,
    view_to_normalized,
    view_transform,
)
from chess_capture.geometry.payload import (
    build_corner_payload,
    corners_to_pixels,
    pixel_corners_array,
)

__all__ = [
    'Corner',
    'CornerSet',
    'drag_corner',
    'nudge_corner',
    'FitPolicy',
    'Point',
    'Size',
    'ViewTransform',
    'normalized_to_pixel',
    'normalized_to_view',
    'pixel_to_normalized',
    'truncate_pixel',
    'view_to_normalized',
    'view_transform',
    'build_corner_payload',
    'corners_to_pixels',
    'pixel_corners_array',
]
