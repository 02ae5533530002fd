"""
Raster renderer for strokes.

Draws onto a transparent BGRA numpy canvas with OpenCV. Live segments are
drawn as they arrive; a replay clears the canvas and redraws the whole
history with curve smoothing.
"""
import logging
from typing import Iterable, Optional, Sequence, Tuple

import cv2
import numpy as np

from tracking.config import BrushConfig, CanvasConfig, Color, StrokeConfig, parse_color

from .curve_smoother import smooth
from .geometry import Compositing, Point, Stroke
from .path_simplifier import simplify
from .stroke_builder import LiveSegment, annotate_widths

logger = logging.getLogger(__name__)

# Fixed-point precision for sub-pixel line endpoints
_SHIFT = 4
_SCALE = 1 << _SHIFT

_TRANSPARENT = (0, 0, 0, 0)


def to_bgra(color: Color) -> Tuple[int, int, int, int]:
    r, g, b = parse_color(color)
    return (b, g, r, 255)


class Renderer:
    """
    Transparent drawing surface.

    Paint segments lay down opaque color (source-over); erase segments clear
    pixels back to transparent (destination-out).
    """

    def __init__(
        self,
        canvas: Optional[CanvasConfig] = None,
        stroke: Optional[StrokeConfig] = None,
        brush: Optional[BrushConfig] = None,
    ):
        """
        Initialize the renderer.

        Args:
            canvas: Canvas size in logical units and pixel ratio
            stroke: Smoothing and simplification settings used on replay
            brush: Width parameters used to recompute widths on replay
        """
        self._canvas_config = canvas or CanvasConfig()
        self._stroke_config = stroke or StrokeConfig()
        self._brush = brush or BrushConfig()

        self._ratio = self._canvas_config.pixel_ratio
        self._pixel_width = max(1, int(round(self._canvas_config.width * self._ratio)))
        self._pixel_height = max(1, int(round(self._canvas_config.height * self._ratio)))
        self._image = np.zeros((self._pixel_height, self._pixel_width, 4), dtype=np.uint8)
        self._replay_count = 0

    @property
    def width(self) -> int:
        """Logical canvas width."""
        return self._canvas_config.width

    @property
    def height(self) -> int:
        """Logical canvas height."""
        return self._canvas_config.height

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return self._pixel_width, self._pixel_height

    @property
    def image(self) -> np.ndarray:
        """Copy of the BGRA canvas."""
        return self._image.copy()

    @property
    def replay_count(self) -> int:
        return self._replay_count

    def clear(self) -> None:
        self._image[:] = 0

    def draw_segment(self, segment: LiveSegment) -> None:
        """Live preview: draw one segment immediately."""
        self._line(segment.start, segment.end, segment.width, segment.compositing, segment.color)

    def replay(self, strokes: Iterable[Stroke]) -> None:
        """Clear the canvas and redraw every stroke in order."""
        self.clear()
        count = 0
        for stroke in strokes:
            self.draw_stroke(stroke)
            count += 1
        self._replay_count += 1
        logger.debug("Replayed %d strokes", count)

    def draw_stroke(self, stroke: Stroke) -> None:
        """Render a committed stroke with smoothing and recomputed widths."""
        points = self.prepare_points(stroke.points)
        points = annotate_widths(points, stroke.size, stroke.compositing, self._brush)

        if len(points) == 1:
            self._dot(points[0], points[0].width, stroke.compositing, stroke.color)
            return

        for prev, current in zip(points, points[1:]):
            self._line(prev, current, current.width, stroke.compositing, stroke.color)

    def prepare_points(self, points: Sequence[Point]) -> Sequence[Point]:
        """Simplify then smooth a stroke's path for final rendering."""
        config = self._stroke_config
        # DrawingPipeline.commit already simplified committed strokes; this second
        # pass also covers strokes added to the history directly.
        if config.simplify:
            points = simplify(points, config.simplify_tolerance)
        if len(points) >= 4:
            points = smooth(points, config.tension, config.segments_per_span)
        return points

    def composite_over(self, background: np.ndarray) -> np.ndarray:
        """
        Blend the canvas over a BGR image.

        The canvas is resized to the background if their sizes differ.
        """
        h, w = background.shape[:2]
        overlay = self._image
        if (w, h) != (self._pixel_width, self._pixel_height):
            overlay = cv2.resize(overlay, (w, h), interpolation=cv2.INTER_LINEAR)

        alpha = overlay[:, :, 3:4].astype(np.float32) / 255.0
        blended = background.astype(np.float32) * (1.0 - alpha) + overlay[:, :, :3].astype(np.float32) * alpha
        return blended.astype(np.uint8)

    def _to_pixels(self, point: Point) -> Tuple[int, int]:
        scale = self._ratio * _SCALE
        return int(round(point.x * scale)), int(round(point.y * scale))

    def _thickness(self, width: Optional[float]) -> int:
        if width is None:
            width = self._brush.base_size
        return max(1, int(round(width * self._ratio)))

    def _color(self, compositing: Compositing, color: Color) -> Tuple[int, int, int, int]:
        if compositing is Compositing.ERASE:
            return _TRANSPARENT
        return to_bgra(color)

    def _line(self, start: Point, end: Point, width: Optional[float],
              compositing: Compositing, color: Color) -> None:
        # Thick OpenCV lines have round caps, so consecutive segments join cleanly
        cv2.line(
            self._image,
            self._to_pixels(start),
            self._to_pixels(end),
            self._color(compositing, color),
            thickness=self._thickness(width),
            lineType=cv2.LINE_8,
            shift=_SHIFT,
        )

    def _dot(self, point: Point, width: Optional[float], compositing: Compositing, color: Color) -> None:
        radius = max(1, self._thickness(width) // 2) * _SCALE
        cv2.circle(
            self._image,
            self._to_pixels(point),
            radius,
            self._color(compositing, color),
            thickness=-1,
            lineType=cv2.LINE_8,
            shift=_SHIFT,
        )
