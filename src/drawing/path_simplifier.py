"""
Douglas-Peucker path simplification.

Bounds the point count of long strokes before they are stored, without
visibly changing their shape. Not used on the live drawing path.
"""
import math
from typing import List, Sequence, TypeVar

import numpy as np

from .geometry import Point

P = TypeVar('P', bound=Point)


def _segment_distances(coords: np.ndarray, start: int, end: int) -> np.ndarray:
    """Distance of coords[start+1:end] from the segment coords[start]-coords[end]."""
    a = coords[start]
    b = coords[end]
    inner = coords[start + 1:end]
    ab = b - a
    length_sq = float(ab @ ab)
    
    if length_sq == 0.0:
        # Degenerate chord: plain point-to-point distance
        return np.hypot(*(inner - a).T)
    
    t = np.clip((inner - a) @ ab / length_sq, 0.0, 1.0)
    projection = a + t[:, None] * ab
    return np.hypot(*(inner - projection).T)


def simplify(points: Sequence[P], tolerance: float = 1.0) -> List[P]:
    """
    Simplify a path with the Douglas-Peucker algorithm.
    
    The point farthest from the chord between the first and last point is
    kept if its distance exceeds `tolerance`, and both halves are simplified
    in turn. Otherwise only the endpoints survive.
    
    Args:
        points: Ordered input points
        tolerance: Maximum allowed deviation (>= 0, may be math.inf)
    
    Returns:
        Subsequence of the input points.
    """
    if tolerance < 0 or math.isnan(tolerance):
        raise ValueError("tolerance must be >= 0")
    if len(points) <= 2:
        return list(points)
    
    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    keep = np.zeros(len(points), dtype=bool)
    keep[0] = keep[-1] = True
    
    # Iterative form of the recursive split
    stack = [(0, len(points) - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        distances = _segment_distances(coords, start, end)
        offset = int(np.argmax(distances))
        if distances[offset] > tolerance:
            split = start + 1 + offset
            keep[split] = True
            stack.append((start, split))
            stack.append((split, end))
    
    return [p for p, kept in zip(points, keep) if kept]
