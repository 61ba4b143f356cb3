"""
Corner Set

The four user-adjustable points outlining the photographed board, stored in
normalized image space.

Canonical order (clockwise):
    0: top-left   1: top-right   2: bottom-right   3: bottom-left

Corners are addressed by index/role, never by spatial position: a drag that
moves one corner past another does not reorder the set.
"""

import logging
from enum import IntEnum
from typing import Iterator, Tuple, Union

import numpy as np

from chess_capture.geometry.mapper import (
    FitPolicy,
    Point,
    PointLike,
    SizeLike,
    clamp,
    view_delta_to_normalized,
    view_to_normalized,
)

logger = logging.getLogger(__name__)

DEFAULT_INSET = 0.1


class Corner(IntEnum):
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_RIGHT = 2
    BOTTOM_LEFT = 3


def _clamp_point(point: PointLike) -> Point:
    x, y = point
    return Point(clamp(x), clamp(y))


class CornerSet:
    """
    Immutable ordered 4-tuple of normalized points.

    Every coordinate is clamped to [0, 1] on construction. Updates return a
    new CornerSet with exactly one element replaced.
    """

    __slots__ = ("_points",)

    def __init__(self, points):
        points = tuple(points)
        if len(points) != 4:
            raise ValueError(f"A corner set needs 4 points, got {len(points)}")
        self._points: Tuple[Point, Point, Point, Point] = tuple(
            _clamp_point(p) for p in points
        )

    @classmethod
    def default(cls, inset: float = DEFAULT_INSET) -> "CornerSet":
        """
        Inset rectangle used when a photo is first shown.

        With the default inset the corners sit at 10% / 90% of each axis,
        leaving room to drag outward.
        """
        if not 0.0 <= inset < 0.5:
            raise ValueError(f"inset must be in [0, 0.5), got {inset}")
        low, high = inset, 1.0 - inset
        return cls([(low, low), (high, low), (high, high), (low, high)])

    @classmethod
    def full(cls) -> "CornerSet":
        return cls.default(inset=0.0)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "CornerSet":
        array = np.asarray(array, dtype=np.float64)
        if array.shape != (4, 2):
            raise ValueError(f"Expected a (4, 2) array, got {array.shape}")
        return cls(array.tolist())

    def as_array(self) -> np.ndarray:
        """Corners as a (4, 2) float64 array in canonical order."""
        return np.array(self._points, dtype=np.float64)

    def with_corner(self, index: Union[int, Corner], point: PointLike) -> "CornerSet":
        """
        Replace a single corner.

        Args:
            index: 0-3 or a Corner
            point: New normalized position (clamped)

        Returns:
            New CornerSet; the other three corners are untouched
        """
        index = _check_index(index)
        points = list(self._points)
        points[index] = _clamp_point(point)
        return CornerSet(points)

    def __getitem__(self, index: Union[int, Corner]) -> Point:
        return self._points[_check_index(index)]

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __len__(self) -> int:
        return 4

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CornerSet):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        inner = ", ".join(f"({p.x:.3f}, {p.y:.3f})" for p in self._points)
        return f"CornerSet([{inner}])"


def _check_index(index: Union[int, Corner]) -> int:
    if not 0 <= int(index) < 4:
        raise ValueError(f"Corner index must be 0-3, got {index}")
    return int(index)


def drag_corner(
    corners: CornerSet,
    index: Union[int, Corner],
    view_point: PointLike,
    view_size: SizeLike,
    image_size: SizeLike,
    fit: FitPolicy = FitPolicy.ASPECT_FILL,
) -> CornerSet:
    """
    Move one corner to where a drag gesture currently is.

    Args:
        corners: Current corner set
        index: Corner being dragged
        view_point: Gesture location in view coordinates
        view_size: (width, height) of the view
        image_size: (width, height) of the image in pixels
        fit: Fit policy of the view (the corner editor uses aspect-fill)

    Returns:
        New CornerSet with only `index` changed
    """
    point = view_to_normalized(view_point, view_size, image_size, fit)
    logger.debug(f"Corner {int(index)} dragged to ({point.x:.4f}, {point.y:.4f})")
    return corners.with_corner(index, point)


def nudge_corner(
    corners: CornerSet,
    index: Union[int, Corner],
    view_delta: PointLike,
    view_size: SizeLike,
    image_size: SizeLike,
    fit: FitPolicy = FitPolicy.ASPECT_FILL,
) -> CornerSet:
    """Translate one corner by a view-space drag translation."""
    dx, dy = view_delta_to_normalized(view_delta, view_size, image_size, fit)
    x, y = corners[index]
    return corners.with_corner(index, (x + dx, y + dy))
