"""Geometry primitives for orthogonal floor outlines.

All coordinates are canvas pixels; ``scale`` converts them to meters
(pixels per meter). Outlines are sequences of :class:`Point`, optionally
closed by repeating the first point at the end. Every function here treats
the sequence as implicitly closed.
"""

from __future__ import annotations

import math
from typing import Sequence

from calepinage.domain.value_objects import BoundingBox, EdgeLength, Point

# Edges shorter than this (meters) carry no dimension label
MIN_LABELLED_EDGE_M = 0.01

# Coordinates closer than this (pixels) count as equal for orthogonality
ORTHOGONAL_TOLERANCE = 1e-6


def round_tenth(value: float) -> float:
    """Round to the nearest 0.1, halves away from zero."""
    rounded = math.floor(abs(value) * 10 + 0.5) / 10
    return math.copysign(rounded, value) if rounded else 0.0


def points_from_flat(coords: Sequence[float]) -> tuple[Point, ...]:
    """Convert a flat ``[x0, y0, x1, y1, ...]`` sequence into points.

    Raises:
        ValueError: If the sequence has an odd number of coordinates.
    """
    if len(coords) % 2:
        raise ValueError("Flat coordinate sequence must have an even length")
    return tuple(
        Point(float(coords[i]), float(coords[i + 1])) for i in range(0, len(coords), 2)
    )


def flatten(points: Sequence[Point]) -> list[float]:
    """Convert points back into a flat ``[x0, y0, x1, y1, ...]`` list."""
    coords: list[float] = []
    for point in points:
        coords.extend((point.x, point.y))
    return coords


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def polygon_area(points: Sequence[Point], scale: float) -> float:
    """Area of the polygon in square meters (shoelace formula).

    Indices wrap around, so an explicit closing point is optional and
    winding direction does not matter.

    Args:
        points: Polygon vertices in pixels.
        scale: Pixels per meter.

    Returns:
        Absolute area in square meters, 0.0 for fewer than 3 points or a
        non-positive scale.
    """
    n = len(points)
    if n < 3 or scale <= 0:
        return 0.0
    twice_area = 0.0
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        twice_area += p1.x * p2.y - p2.x * p1.y
    return abs(twice_area / (2 * scale * scale))


def point_in_polygon(x: float, y: float, points: Sequence[Point]) -> bool:
    """Ray-casting (crossing number) inclusion test.

    A horizontal ray is cast towards +x and crossings with the polygon
    edges are counted, wrapping from the last vertex to the first. Points
    exactly on a left or top edge count as inside, points on a right or
    bottom edge as outside.
    """
    inside = False
    n = len(points)
    j = n - 1
    for i in range(n):
        pi = points[i]
        pj = points[j]
        if (pi.y > y) != (pj.y > y):
            x_cross = (pj.x - pi.x) * (y - pi.y) / (pj.y - pi.y) + pi.x
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def bounding_box(points: Sequence[Point]) -> BoundingBox:
    """Bounding box of a non-empty point sequence.

    Raises:
        ValueError: If ``points`` is empty.
    """
    if not points:
        raise ValueError("Cannot compute the bounding box of an empty outline")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoundingBox(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))


def snap_to_axis(anchor: Point, target: Point, scale: float | None = None) -> Point:
    """Project ``target`` onto the dominant axis through ``anchor``.

    If the horizontal delta is strictly larger the result shares the
    anchor's y, otherwise its x. When ``scale`` is given, the projected
    offset is rounded to the nearest 0.1 m.
    """
    dx = target.x - anchor.x
    dy = target.y - anchor.y
    if abs(dx) > abs(dy):
        if scale:
            dx = round_tenth(dx / scale) * scale
        return Point(anchor.x + dx, anchor.y)
    if scale:
        dy = round_tenth(dy / scale) * scale
    return Point(anchor.x, anchor.y + dy)


def align_with(anchor: Point, target: Point) -> Point:
    """Keep ``target`` on the axis of larger delta, snap the other to ``anchor``."""
    if abs(target.x - anchor.x) > abs(target.y - anchor.y):
        return Point(target.x, anchor.y)
    return Point(anchor.x, target.y)


def is_orthogonal(points: Sequence[Point], tolerance: float = ORTHOGONAL_TOLERANCE) -> bool:
    """True if every consecutive edge is horizontal or vertical."""
    for p1, p2 in zip(points, points[1:]):
        if abs(p1.x - p2.x) > tolerance and abs(p1.y - p2.y) > tolerance:
            return False
    return True


def distinct_corners(points: Sequence[Point]) -> list[Point]:
    """Vertices without the closing duplicate of the first point."""
    if len(points) > 1 and points[0] == points[-1]:
        return list(points[:-1])
    return list(points)


def edge_lengths(points: Sequence[Point], scale: float) -> list[EdgeLength]:
    """Dimension labels for consecutive edges of an outline.

    Edges shorter than 1 cm are skipped. Only the explicit edges of the
    sequence are measured; an open outline gets no closing edge.
    """
    if scale <= 0:
        return []
    labels: list[EdgeLength] = []
    for p1, p2 in zip(points, points[1:]):
        meters = distance(p1, p2) / scale
        if meters < MIN_LABELLED_EDGE_M:
            continue
        labels.append(
            EdgeLength(
                start=p1,
                end=p2,
                meters=round_tenth(meters),
                horizontal=abs(p2.x - p1.x) > abs(p2.y - p1.y),
            )
        )
    return labels
