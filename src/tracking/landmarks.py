"""
Fixed-shape hand landmark set.

The detector hands over 21 normalized (x, y, z) points per frame. Anything
that does not have that shape is rejected here.
"""
import logging
import math
from typing import Iterable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Landmark = Tuple[float, float, float]

NUM_LANDMARKS = 21


class LandmarkSet:
    """
    Normalized hand landmarks for a single hand.
    
    Attributes:
        points: Tuple of 21 (x, y, z) tuples, normalized 0-1
    """
    
    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_TIP = 8
    MIDDLE_PIP = 10
    MIDDLE_TIP = 12
    RING_PIP = 14
    RING_TIP = 16
    PINKY_PIP = 18
    PINKY_TIP = 20

    __slots__ = ('_points',)

    def __init__(self, points: Iterable[Sequence[float]]):
        converted = []
        for point in points:
            if len(point) == 2:
                x, y = point
                z = 0.0
            elif len(point) == 3:
                x, y, z = point
            else:
                raise ValueError(f"Landmark must have 2 or 3 coordinates, got {len(point)}")
            landmark = (float(x), float(y), float(z))
            if not all(math.isfinite(c) for c in landmark):
                raise ValueError(f"Landmark has non-finite coordinates: {landmark}")
            converted.append(landmark)
        
        if len(converted) != NUM_LANDMARKS:
            raise ValueError(f"Expected {NUM_LANDMARKS} landmarks, got {len(converted)}")
        self._points: Tuple[Landmark, ...] = tuple(converted)

    @classmethod
    def parse(cls, raw) -> Optional['LandmarkSet']:
        """
        Build a LandmarkSet from detector output.
        
        Returns None for missing or malformed input, which callers treat as
        "no hand detected".
        """
        if raw is None:
            return None
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except (TypeError, ValueError) as e:
            logger.debug("Discarding malformed landmarks: %s", e)
            return None

    @property
    def points(self) -> Tuple[Landmark, ...]:
        return self._points

    def get(self, index: int) -> Landmark:
        """Get landmark by index."""
        return self._points[index]

    @property
    def index_tip(self) -> Landmark:
        return self._points[self.INDEX_TIP]

    def __len__(self) -> int:
        return NUM_LANDMARKS

    def __eq__(self, other) -> bool:
        if not isinstance(other, LandmarkSet):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        x, y, _ = self.index_tip
        return f"LandmarkSet(index_tip=({x:.3f}, {y:.3f}))"
