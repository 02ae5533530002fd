"""
Canvas-space geometry for strokes.
"""
from dataclasses import dataclass
from enum import Enum
import math
import time
import uuid
from typing import Optional, Tuple, Union, Sequence


@dataclass(frozen=True)
class Point:
    """
    One sample in canvas space.
    
    Attributes:
        x, y: Canvas coordinates
        timestamp: Capture time in milliseconds
        pressure: Optional pressure in (0, 1]
        width: Cached line width of the segment ending at this point
    """
    x: float
    y: float
    timestamp: Optional[int] = None
    pressure: Optional[float] = None
    width: Optional[float] = None


class Compositing(Enum):
    """How a segment combines with existing pixels."""
    PAINT = "paint"   # source-over
    ERASE = "erase"   # destination-out


@dataclass(frozen=True)
class Stroke:
    """
    One committed drawing or erasing gesture.
    
    Points are stored as a tuple so a committed stroke cannot be mutated.
    """
    id: str
    points: Tuple[Point, ...]
    color: Union[str, Sequence[int]]
    size: float
    compositing: Compositing = Compositing.PAINT

    def __post_init__(self):
        if not self.points:
            raise ValueError("Stroke needs at least one point")
        if self.size <= 0:
            raise ValueError("Stroke size must be > 0")
        # Accept any sequence but store a tuple
        object.__setattr__(self, 'points', tuple(self.points))

    @property
    def is_erase(self) -> bool:
        return self.compositing is Compositing.ERASE

    def __len__(self) -> int:
        return len(self.points)


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def generate_stroke_id() -> str:
    """Unique stroke id: millisecond clock plus a random suffix."""
    return f"stroke-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
