import pytest

from drawing.geometry import Compositing, Point
from drawing.stroke_builder import StrokeBuilder, annotate_widths, velocity_width
from tracking.config import BrushConfig, ConfigError
from tracking.coordinate_filter import CoordinateFilter
from tracking.gesture_classifier import Mode


@pytest.fixture
def builder():
    brush = BrushConfig(color="#102030", base_size=10.0)
    return StrokeBuilder(CoordinateFilter(), brush)


def path(n, start=(100.0, 100.0), step=(5.0, 3.0)):
    return [Point(start[0] + i * step[0], start[1] + i * step[1], timestamp=i * 33) for i in range(n)]


def test_five_draw_frames_then_pause_commit_one_stroke(builder):
    for p in path(5):
        result = builder.on_frame(Mode.DRAW, p)
        assert result.finalized_stroke is None
    result = builder.on_frame(Mode.PAUSE, None)
    
    assert result.finalized_stroke is not None
    stroke = result.finalized_stroke
    assert len(stroke.points) == 5
    assert stroke.color == "#102030"
    assert stroke.size == 10.0
    assert stroke.compositing is Compositing.PAINT
    assert not builder.in_progress

def test_single_point_is_discarded(builder):
    builder.on_frame(Mode.DRAW, Point(10.0, 10.0))
    result = builder.on_frame(Mode.PAUSE, None)
    assert result.finalized_stroke is None
    assert not builder.in_progress

def test_live_segments_follow_the_first_point(builder):
    points = path(4)
    first = builder.on_frame(Mode.DRAW, points[0])
    assert first.live_segment is None
    
    segments = [builder.on_frame(Mode.DRAW, p).live_segment for p in points[1:]]
    assert all(s is not None for s in segments)
    assert segments[0].start.x == points[0].x
    assert segments[1].start == segments[0].end
    assert all(s.compositing is Compositing.PAINT for s in segments)
    assert all(s.width >= 1.0 for s in segments)

def test_first_point_is_unfiltered(builder):
    builder.on_frame(Mode.DRAW, Point(42.0, 24.0))
    assert (builder.points[0].x, builder.points[0].y) == (42.0, 24.0)

def test_points_are_filtered(builder):
    builder.on_frame(Mode.DRAW, Point(0.0, 0.0))
    builder.on_frame(Mode.DRAW, Point(100.0, 0.0))
    assert 0.0 < builder.points[1].x < 100.0

@pytest.mark.parametrize("end_mode", [Mode.PAUSE, Mode.NONE])
def test_interruptions_finalize(builder, end_mode):
    for p in path(3):
        builder.on_frame(Mode.DRAW, p)
    assert builder.on_frame(end_mode, None).finalized_stroke is not None

def test_hand_lost_finalizes_even_with_active_mode(builder):
    for p in path(3):
        builder.on_frame(Mode.DRAW, p)
    assert builder.on_frame(Mode.DRAW, None).finalized_stroke is not None

def test_filter_reset_after_finalize(builder):
    for p in path(3):
        builder.on_frame(Mode.DRAW, p)
    builder.on_frame(Mode.PAUSE, None)
    
    builder.on_frame(Mode.DRAW, Point(500.0, 400.0))
    assert (builder.points[0].x, builder.points[0].y) == (500.0, 400.0)

def test_mode_switch_restarts_stroke(builder):
    for p in path(3):
        builder.on_frame(Mode.DRAW, p)
    
    result = builder.on_frame(Mode.ERASE, Point(300.0, 300.0))
    
    assert result.finalized_stroke is not None
    assert result.finalized_stroke.compositing is Compositing.PAINT
    assert len(result.finalized_stroke.points) == 3
    assert result.live_segment is None
    assert builder.mode is Mode.ERASE
    assert len(builder.points) == 1
    assert (builder.points[0].x, builder.points[0].y) == (300.0, 300.0)

def test_erase_to_draw_switch_restarts_stroke(builder):
    for p in path(3):
        builder.on_frame(Mode.ERASE, p)
    
    result = builder.on_frame(Mode.DRAW, Point(300.0, 300.0))
    
    assert result.finalized_stroke is not None
    assert result.finalized_stroke.compositing is Compositing.ERASE
    assert len(result.finalized_stroke.points) == 3
    assert builder.mode is Mode.DRAW
    assert len(builder.points) == 1
    
    builder.on_frame(Mode.DRAW, Point(310.0, 300.0))
    stroke = builder.on_frame(Mode.PAUSE, None).finalized_stroke
    assert stroke.compositing is Compositing.PAINT

def test_erase_width_is_fixed_multiple(builder):
    builder.on_frame(Mode.ERASE, Point(0.0, 0.0))
    slow = builder.on_frame(Mode.ERASE, Point(1.0, 0.0)).live_segment
    fast = builder.on_frame(Mode.ERASE, Point(300.0, 0.0)).live_segment
    
    assert slow.compositing is Compositing.ERASE
    assert slow.width == pytest.approx(25.0)
    assert fast.width == pytest.approx(25.0)
    
    stroke = builder.on_frame(Mode.PAUSE, None).finalized_stroke
    assert stroke.compositing is Compositing.ERASE

def test_brush_change_applies_to_next_stroke(builder):
    builder.on_frame(Mode.DRAW, Point(0.0, 0.0))
    builder.set_brush(color="#ffffff", size=3.0)
    builder.on_frame(Mode.DRAW, Point(5.0, 0.0))
    first = builder.on_frame(Mode.PAUSE, None).finalized_stroke
    assert first.color == "#102030"
    assert first.size == 10.0
    
    builder.on_frame(Mode.DRAW, Point(0.0, 0.0))
    builder.on_frame(Mode.DRAW, Point(5.0, 0.0))
    second = builder.on_frame(Mode.PAUSE, None).finalized_stroke
    assert second.color == "#ffffff"
    assert second.size == 3.0

@pytest.mark.parametrize("kwargs", [dict(size=0), dict(size=-2.0), dict(color="not-a-color")])
def test_invalid_brush_rejected(builder, kwargs):
    with pytest.raises(ConfigError):
        builder.set_brush(**kwargs)

def test_stroke_ids_are_unique(builder):
    ids = set()
    for _ in range(20):
        for p in path(2):
            builder.on_frame(Mode.DRAW, p)
        ids.add(builder.on_frame(Mode.PAUSE, None).finalized_stroke.id)
    assert len(ids) == 20


class TestVelocityWidth:
    def test_no_previous_point(self):
        assert velocity_width(Point(0, 0), None, 10.0) == 10.0
        assert velocity_width(Point(0, 0, pressure=0.5), None, 10.0) == 5.0

    def test_stationary_keeps_base(self):
        assert velocity_width(Point(0, 0), Point(0, 0), 10.0) == pytest.approx(10.0)

    def test_fast_movement_thins_line(self):
        # factor clamps to 0.4 -> 4.0, blended with previous width 10.0
        assert velocity_width(Point(80, 0), Point(0, 0), 10.0) == pytest.approx(7.6)

    def test_blends_with_previous_width(self):
        prev = Point(0, 0, width=2.0)
        assert velocity_width(Point(0, 0), prev, 10.0) == pytest.approx(2.0 * 0.6 + 10.0 * 0.4)

    def test_floor_at_one(self):
        prev = Point(0, 0, width=1.0)
        assert velocity_width(Point(200, 0), prev, 1.0) == 1.0

    def test_annotate_widths(self):
        brush = BrushConfig(base_size=10.0)
        points = annotate_widths([Point(0, 0), Point(10, 0), Point(20, 0)], 10.0, Compositing.PAINT, brush)
        assert points[0].width == 10.0
        assert all(p.width is not None for p in points)
        
        erased = annotate_widths([Point(0, 0), Point(50, 0)], 4.0, Compositing.ERASE, brush)
        assert [p.width for p in erased] == [10.0, 10.0]
