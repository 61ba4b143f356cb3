"""
Coordinate Mapper

Pure functions translating points between three coordinate frames:

    1. Normalized image space: [0, 1] x [0, 1], origin top-left.
       Canonical storage frame for corner sets.
    2. Pixel space: width x height of the full-resolution source image.
       Required by the remote recognizer.
    3. View space: the on-screen rectangle showing the image under an
       aspect-fit or aspect-fill policy. Gestures arrive in this frame.

View Transform:
    scale    = min(vw / iw, vh / ih)   (aspect-fit, letterboxed)
             = max(vw / iw, vh / ih)   (aspect-fill, cropped)
    x_offset = (vw - iw * scale) / 2   (negative under fill when cropped)
    y_offset = (vh - ih * scale) / 2

    view = normalized * image_size * scale + offset

view_to_normalized() clamps to [0, 1]; the other transforms do not, so that
normalized -> pixel -> normalized round-trips exactly.
"""

from enum import Enum
from typing import NamedTuple, Tuple, Union

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


class Size(NamedTuple):
    width: float
    height: float


class FitPolicy(Enum):
    """How an image is scaled into a view while keeping its aspect ratio."""
    ASPECT_FIT = "fit"    # whole image visible, letterboxed
    ASPECT_FILL = "fill"  # view fully covered, image cropped


class ViewTransform(NamedTuple):
    """Uniform scale plus centering offsets from image pixels to view space."""
    scale: float
    x_offset: float
    y_offset: float


PointLike = Union[Point, Tuple[float, float]]
SizeLike = Union[Size, Tuple[float, float]]


def _check_size(size: SizeLike, what: str) -> Size:
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"{what} dimensions must be positive, got {width}x{height}")
    return Size(float(width), float(height))


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clip value into [low, high]; NaN maps to low."""
    if np.isnan(value):
        return float(low)
    return float(np.clip(value, low, high))


def view_transform(view_size: SizeLike, image_size: SizeLike, fit: FitPolicy) -> ViewTransform:
    """
    Compute the scale and offsets placing an image centered in a view.

    Args:
        view_size: (width, height) of the view
        image_size: (width, height) of the image in pixels
        fit: ASPECT_FIT or ASPECT_FILL

    Returns:
        ViewTransform(scale, x_offset, y_offset)

    Raises:
        ValueError: If either size has a non-positive dimension
    """
    view = _check_size(view_size, "View")
    image = _check_size(image_size, "Image")

    ratios = (view.width / image.width, view.height / image.height)
    scale = min(ratios) if fit is FitPolicy.ASPECT_FIT else max(ratios)

    x_offset = (view.width - image.width * scale) / 2.0
    y_offset = (view.height - image.height * scale) / 2.0
    return ViewTransform(scale, x_offset, y_offset)


def normalized_to_pixel(point: PointLike, image_width: float, image_height: float) -> Point:
    """
    Scale a normalized point to pixel space.

    The result is kept as floating point; see truncate_pixel() for the
    integer form.
    """
    _check_size((image_width, image_height), "Image")
    x, y = point
    return Point(x * image_width, y * image_height)


def pixel_to_normalized(point: PointLike, image_width: float, image_height: float) -> Point:
    """Inverse of normalized_to_pixel(). Not clamped."""
    _check_size((image_width, image_height), "Image")
    x, y = point
    return Point(x / image_width, y / image_height)


def truncate_pixel(point: PointLike) -> Tuple[int, int]:
    """Integer pixel coordinates, truncated toward zero (never rounded)."""
    x, y = np.trunc(np.asarray(point, dtype=np.float64))
    return int(x), int(y)


def view_to_normalized(
    point: PointLike,
    view_size: SizeLike,
    image_size: SizeLike,
    fit: FitPolicy,
) -> Point:
    """
    Convert a view-space location (e.g. a drag gesture) to normalized space.

    The result is clamped to [0, 1] so a gesture leaving the image can never
    produce an out-of-range corner.

    Args:
        point: (x, y) in view coordinates
        view_size: (width, height) of the view
        image_size: (width, height) of the image in pixels
        fit: Fit policy the image is displayed with

    Returns:
        Normalized Point
    """
    scale, x_offset, y_offset = view_transform(view_size, image_size, fit)
    image_width, image_height = image_size
    x, y = point

    return Point(
        clamp((x - x_offset) / scale / image_width),
        clamp((y - y_offset) / scale / image_height),
    )


def normalized_to_view(
    point: PointLike,
    view_size: SizeLike,
    image_size: SizeLike,
    fit: FitPolicy,
) -> Point:
    """
    Convert a normalized point to view coordinates (for drawing overlays).

    Exact inverse of view_to_normalized() for points inside the image.
    """
    scale, x_offset, y_offset = view_transform(view_size, image_size, fit)
    image_width, image_height = image_size
    x, y = point

    return Point(
        x * image_width * scale + x_offset,
        y * image_height * scale + y_offset,
    )


def view_delta_to_normalized(
    delta: PointLike,
    view_size: SizeLike,
    image_size: SizeLike,
    fit: FitPolicy,
) -> Point:
    """Convert a view-space translation into a normalized-space translation."""
    scale, _, _ = view_transform(view_size, image_size, fit)
    image_width, image_height = image_size
    dx, dy = delta
    return Point(dx / scale / image_width, dy / scale / image_height)
