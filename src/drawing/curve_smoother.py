"""
Catmull-Rom curve smoothing for finished strokes.
"""
from typing import List, Sequence

from .geometry import Point


def smooth(points: Sequence[Point], tension: float = 0.5, segments_per_span: int = 6) -> List[Point]:
    """
    Densify a point path with a cardinal (Catmull-Rom) spline.
    
    Each window [p0, p1, p2, p3] contributes `segments_per_span` samples on
    the curve from p1 towards p2. The last two input points are appended
    verbatim so the curve ends exactly where the stroke did. Tension 0.5 is
    the classic Catmull-Rom spline.
    
    Args:
        points: Ordered input points
        tension: Tangent scale
        segments_per_span: Samples per window (>= 1)
    
    Returns:
        The smoothed path. Paths with fewer than 4 points are returned
        unchanged.
    """
    if segments_per_span < 1:
        raise ValueError("segments_per_span must be >= 1")
    if len(points) < 4:
        return list(points)
    
    smoothed: List[Point] = []
    
    for i in range(len(points) - 3):
        p0, p1, p2, p3 = points[i], points[i + 1], points[i + 2], points[i + 3]
        
        # Tangents at p1 and p2
        m1x, m1y = tension * (p2.x - p0.x), tension * (p2.y - p0.y)
        m2x, m2y = tension * (p3.x - p1.x), tension * (p3.y - p1.y)
        
        for step in range(segments_per_span):
            t = step / segments_per_span
            t2 = t * t
            t3 = t2 * t
            
            # Cubic Hermite basis
            h00 = 2 * t3 - 3 * t2 + 1
            h10 = t3 - 2 * t2 + t
            h01 = -2 * t3 + 3 * t2
            h11 = t3 - t2
            
            x = h00 * p1.x + h10 * m1x + h01 * p2.x + h11 * m2x
            y = h00 * p1.y + h10 * m1y + h01 * p2.y + h11 * m2y
            smoothed.append(Point(x, y, pressure=p1.pressure))
    
    smoothed.append(points[-2])
    smoothed.append(points[-1])
    return smoothed
