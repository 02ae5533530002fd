"""
Per-frame drawing pipeline.

landmarks -> classify -> filter fingertip -> stroke builder -> history -> renderer

Frames must be fed in arrival order from a single thread: the filter and the
stroke accumulator carry state from one frame to the next.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional

from tracking.config import Color, Config
from tracking.coordinate_filter import CoordinateFilter
from tracking.gesture_classifier import Mode, classify
from tracking.landmarks import LandmarkSet

from .geometry import Point, Stroke
from .history import StrokeHistory
from .path_simplifier import simplify
from .renderer import Renderer
from .stroke_builder import FrameResult, StrokeBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineState:
    """What happened on one frame."""
    mode: Mode
    result: FrameResult
    committed: Optional[Stroke] = None


class DrawingPipeline:
    """
    Owns the filter, stroke builder, history and renderer for one drawing
    session and drives them once per camera frame.
    """

    def __init__(self, config: Optional[Config] = None):
        self._config = config or Config()

        self.coordinate_filter = CoordinateFilter.from_config(self._config.filter)
        self.builder = StrokeBuilder(self.coordinate_filter, self._config.brush)
        self.history = StrokeHistory(self._config.history.capacity)
        self.renderer = Renderer(self._config.canvas, self._config.stroke, self._config.brush)

        self._mode = Mode.NONE
        self.history.add_listener(self._on_history_change)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def mode(self) -> Mode:
        """Mode classified on the most recent frame."""
        return self._mode

    def process(self, landmarks=None, timestamp: Optional[int] = None) -> PipelineState:
        """
        Process one frame of detector output.

        Args:
            landmarks: LandmarkSet, a raw 21-point sequence, or None for no
                       hand. Malformed input is treated as no hand.
            timestamp: Frame time in milliseconds; defaults to now.

        Returns:
            PipelineState for the frame.
        """
        hand = LandmarkSet.parse(landmarks)
        mode = classify(hand)
        self._mode = mode

        point = None
        if hand is not None and mode.is_active:
            if timestamp is None:
                timestamp = int(time.perf_counter() * 1000)
            point = self.to_canvas(hand, timestamp)

        result = self.builder.on_frame(mode, point)

        if result.live_segment is not None:
            self.renderer.draw_segment(result.live_segment)

        committed = None
        if result.finalized_stroke is not None:
            committed = self.commit(result.finalized_stroke)

        return PipelineState(mode=mode, result=result, committed=committed)

    def to_canvas(self, hand: LandmarkSet, timestamp: Optional[int] = None) -> Point:
        """Map the normalized index fingertip into canvas coordinates."""
        x, y, _ = hand.index_tip
        canvas = self._config.canvas
        return Point(x * canvas.width, y * canvas.height, timestamp=timestamp)

    def commit(self, stroke: Stroke) -> Stroke:
        """Simplify a finished stroke (if enabled) and add it to the history."""
        stroke_config = self._config.stroke
        if stroke_config.simplify:
            points = simplify(stroke.points, stroke_config.simplify_tolerance)
            if len(points) < len(stroke.points):
                logger.debug("Simplified stroke %s: %d -> %d points",
                             stroke.id, len(stroke.points), len(points))
                stroke = Stroke(
                    id=stroke.id,
                    points=tuple(points),
                    color=stroke.color,
                    size=stroke.size,
                    compositing=stroke.compositing,
                )
        self.history.add_stroke(stroke)
        return stroke

    def set_brush(self, color: Optional[Color] = None, size: Optional[float] = None) -> None:
        """Change brush color and/or size for the next stroke."""
        self.builder.set_brush(color=color, size=size)

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def clear(self) -> None:
        """Drop the stroke in progress and wipe the history."""
        self.builder.cancel()
        self.history.clear()

    def _on_history_change(self) -> None:
        self.renderer.replay(self.history.get_strokes())
