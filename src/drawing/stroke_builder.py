"""
Stroke accumulation for the stroke currently being drawn.

Consumes one (mode, fingertip) pair per frame, emits live segments for
immediate rendering and hands back finished strokes for the history.
"""
from dataclasses import dataclass, replace
import logging
from typing import List, Optional, Sequence

from tracking.config import BrushConfig, Color, ConfigError, parse_color
from tracking.gesture_classifier import Mode

from .geometry import Compositing, Point, Stroke, clamp, distance, generate_stroke_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiveSegment:
    """A single line segment to draw right away."""
    start: Point
    end: Point
    width: float
    compositing: Compositing
    color: Color


@dataclass(frozen=True)
class FrameResult:
    """Output of one StrokeBuilder frame."""
    live_segment: Optional[LiveSegment] = None
    finalized_stroke: Optional[Stroke] = None


def velocity_width(
    current: Point,
    prev: Optional[Point],
    base_size: float,
    min_factor: float = 0.4,
    max_factor: float = 1.2,
    velocity_scale: float = 80.0,
    smoothing: float = 0.6,
    min_width: float = 1.0,
) -> float:
    """
    Line width for the segment prev -> current.

    Faster movement gives a thinner line, like a real brush. The result is
    blended with the previous segment's width to avoid jarring changes.
    """
    pressure = current.pressure if current.pressure is not None else 1.0
    if prev is None:
        return base_size * pressure

    factor = clamp(1 - distance(prev, current) / velocity_scale, min_factor, max_factor)
    width = base_size * factor * pressure

    prev_width = prev.width if prev.width is not None else base_size
    smoothed = prev_width * smoothing + width * (1 - smoothing)
    return max(min_width, smoothed)


def brush_width(current: Point, prev: Optional[Point], size: float,
                compositing: Compositing, brush: BrushConfig) -> float:
    """Width for one segment under the given brush settings."""
    if compositing is Compositing.ERASE:
        return size * brush.eraser_multiplier
    return velocity_width(
        current, prev, size,
        min_factor=brush.min_width_factor,
        max_factor=brush.max_width_factor,
        velocity_scale=brush.velocity_scale,
        smoothing=brush.width_smoothing,
        min_width=brush.min_width,
    )


def annotate_widths(points: Sequence[Point], size: float, compositing: Compositing,
                    brush: BrushConfig) -> List[Point]:
    """Recompute the cached width of every point along a path."""
    annotated: List[Point] = []
    prev: Optional[Point] = None
    for point in points:
        width = brush_width(point, prev, size, compositing, brush)
        prev = replace(point, width=width)
        annotated.append(prev)
    return annotated


class StrokeBuilder:
    """
    Accumulates filtered fingertip points for the stroke in progress.

    The brush (color and size) is captured when a stroke starts, so changes
    made mid-stroke apply to the next stroke only.
    """

    MIN_POINTS = 2

    def __init__(self, coordinate_filter, brush: Optional[BrushConfig] = None):
        """
        Initialize the builder.

        Args:
            coordinate_filter: CoordinateFilter applied to every incoming point
            brush: Brush settings; defaults to BrushConfig()
        """
        self._filter = coordinate_filter
        self._brush = brush or BrushConfig()
        self._color: Color = self._brush.color
        self._size: float = self._brush.base_size

        # In-progress stroke state
        self._points: List[Point] = []
        self._mode: Optional[Mode] = None
        self._stroke_color: Color = self._color
        self._stroke_size: float = self._size

    @property
    def brush(self) -> BrushConfig:
        return self._brush

    @property
    def color(self) -> Color:
        return self._color

    @property
    def size(self) -> float:
        return self._size

    def set_brush(self, color: Optional[Color] = None, size: Optional[float] = None) -> None:
        """
        Change the brush for the next stroke.

        Raises:
            ConfigError: If the color cannot be parsed or size is not positive.
        """
        if color is not None:
            parse_color(color)
            self._color = color
        if size is not None:
            if size <= 0:
                raise ConfigError("Brush size must be > 0")
            self._size = float(size)

    @property
    def in_progress(self) -> bool:
        return bool(self._points)

    @property
    def points(self) -> List[Point]:
        """Copy of the points accumulated so far."""
        return list(self._points)

    @property
    def mode(self) -> Optional[Mode]:
        """Mode of the stroke in progress, None when idle."""
        return self._mode

    def on_frame(self, mode: Mode, point: Optional[Point]) -> FrameResult:
        """
        Advance by one frame.

        Args:
            mode: Classified mode for this frame
            point: Raw index fingertip in canvas space, None if no hand

        Returns:
            FrameResult with an optional live segment and an optional
            finalized stroke for the caller to commit.
        """
        if not mode.is_active or point is None:
            return FrameResult(finalized_stroke=self.finalize())

        finalized = None
        if self._mode is not None and mode is not self._mode:
            # Draw and erase never share a stroke
            finalized = self.finalize()

        filtered = self._filter.filter_point(point)

        if not self._points:
            self._start(mode, filtered)
            return FrameResult(finalized_stroke=finalized)

        prev = self._points[-1]
        compositing = self._compositing()
        width = brush_width(filtered, prev, self._stroke_size, compositing, self._brush)
        current = replace(filtered, width=width)
        self._points.append(current)

        segment = LiveSegment(
            start=prev,
            end=current,
            width=width,
            compositing=compositing,
            color=self._stroke_color,
        )
        return FrameResult(live_segment=segment, finalized_stroke=finalized)

    def finalize(self) -> Optional[Stroke]:
        """
        End the stroke in progress.

        Returns:
            The packaged Stroke, or None if fewer than two points were
            collected (a single point is not a visible stroke).
        """
        if not self._points:
            return None

        stroke = None
        if len(self._points) >= self.MIN_POINTS:
            stroke = Stroke(
                id=generate_stroke_id(),
                points=tuple(self._points),
                color=self._stroke_color,
                size=self._stroke_size,
                compositing=self._compositing(),
            )
            logger.debug("Finalized %s stroke %s with %d points",
                         stroke.compositing.value, stroke.id, len(stroke.points))
        else:
            logger.debug("Discarded stroke with %d point(s)", len(self._points))

        self.cancel()
        return stroke

    def cancel(self) -> None:
        """Drop the stroke in progress without producing anything."""
        self._points = []
        self._mode = None
        self._filter.reset()

    def _start(self, mode: Mode, point: Point) -> None:
        self._mode = mode
        self._stroke_color = self._color
        self._stroke_size = self._size
        self._points = [point]

    def _compositing(self) -> Compositing:
        return Compositing.ERASE if self._mode is Mode.ERASE else Compositing.PAINT
