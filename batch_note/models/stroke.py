"""
Stroke model - one continuous freehand annotation path
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from ..config import Config

Point = Tuple[float, float]


def simplify_points(points: List[Point], epsilon: float = 1.5) -> List[Point]:
    """
    Simplify path using Ramer-Douglas-Peucker algorithm.

    Args:
        points: List of (x, y) points
        epsilon: Simplification threshold (higher = more simplified)

    Returns:
        Simplified list of points
    """
    if len(points) < 3:
        return list(points)

    def perpendicular_distance(point, start, end):
        if start == end:
            return math.sqrt((point[0] - start[0])**2 + (point[1] - start[1])**2)

        n = abs((end[1] - start[1]) * point[0] - (end[0] - start[0]) * point[1] +
                end[0] * start[1] - end[1] * start[0])
        d = math.sqrt((end[1] - start[1])**2 + (end[0] - start[0])**2)
        return n / d if d > 0 else 0

    start, end = points[0], points[-1]
    max_dist = 0
    max_idx = 0

    for i in range(1, len(points) - 1):
        dist = perpendicular_distance(points[i], start, end)
        if dist > max_dist:
            max_dist = dist
            max_idx = i

    if max_dist > epsilon:
        left = simplify_points(points[:max_idx + 1], epsilon)
        right = simplify_points(points[max_idx:], epsilon)
        return left[:-1] + right
    else:
        return [start, end]


@dataclass
class Stroke:
    """Ordered points plus pen color and width."""
    points: List[Point] = field(default_factory=list)
    color: str = Config.DEFAULT_STROKE_COLOR
    width: float = Config.DEFAULT_STROKE_WIDTH

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"Stroke width must be positive, got {self.width}")
        self.points = [(float(x), float(y)) for x, y in self.points]

    @property
    def is_drawable(self) -> bool:
        """A single point is not a line."""
        return len(self.points) >= 2

    def add_point(self, x: float, y: float):
        self.points.append((float(x), float(y)))

    def restart(self):
        self.points = []

    def simplified(self, epsilon: float) -> 'Stroke':
        """Return a copy with redundant points removed (endpoints kept)."""
        if epsilon <= 0:
            return Stroke(list(self.points), self.color, self.width)
        return Stroke(simplify_points(self.points, epsilon), self.color, self.width)


__all__ = ['Stroke', 'Point', 'simplify_points']
