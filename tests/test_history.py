import pytest

from drawing.geometry import Point, Stroke
from drawing.history import StrokeHistory


def make_stroke(name):
    return Stroke(id=name, points=(Point(0.0, 0.0), Point(1.0, 1.0)), color="#000000", size=4.0)


@pytest.fixture
def strokes():
    return {name: make_stroke(name) for name in "ABCD"}


@pytest.fixture
def history():
    return StrokeHistory(capacity=50)


def test_new_stroke_invalidates_redo(history, strokes):
    A, B, C = strokes["A"], strokes["B"], strokes["C"]
    history.add_stroke(A)
    history.add_stroke(B)
    assert history.undo()
    history.add_stroke(C)
    
    assert history.get_strokes() == (A, C)
    assert not history.can_redo()
    assert not history.redo()

def test_capacity_evicts_oldest_for_good(strokes):
    A, B, C = strokes["A"], strokes["B"], strokes["C"]
    history = StrokeHistory(capacity=2)
    history.add_stroke(A)
    history.add_stroke(B)
    history.add_stroke(C)
    assert history.get_strokes() == (B, C)
    
    assert history.undo()
    assert history.undo()
    assert not history.undo()
    assert history.redo()
    assert history.redo()
    assert not history.redo()
    assert history.get_strokes() == (B, C)

def test_undo_redo_round_trip(history, strokes):
    A, B = strokes["A"], strokes["B"]
    history.add_stroke(A)
    history.add_stroke(B)
    
    assert history.undo()
    assert history.get_strokes() == (A,)
    assert history.can_redo()
    assert history.redo()
    assert history.get_strokes() == (A, B)
    assert not history.can_redo()

def test_empty_history(history):
    assert history.is_empty()
    assert not history.can_undo()
    assert not history.can_redo()
    assert not history.undo()
    assert not history.redo()

def test_one_notification_per_mutation(history, strokes):
    calls = []
    history.add_listener(lambda: calls.append(len(history)))
    
    history.add_stroke(strokes["A"])
    history.add_stroke(strokes["B"])
    history.undo()
    history.redo()
    history.clear()
    
    # Listener sees the state after each mutation
    assert calls == [1, 2, 1, 2, 0]

def test_failed_undo_redo_do_not_notify(history):
    calls = []
    history.add_listener(lambda: calls.append(1))
    history.undo()
    history.redo()
    assert calls == []

def test_clear_drops_redo(history, strokes):
    history.add_stroke(strokes["A"])
    history.undo()
    history.clear()
    assert history.is_empty()
    assert not history.can_redo()

def test_snapshot_is_detached(history, strokes):
    history.add_stroke(strokes["A"])
    snapshot = history.get_strokes()
    history.add_stroke(strokes["B"])
    assert snapshot == (strokes["A"],)

def test_listener_management(history, strokes):
    first, second = [], []
    cb = lambda: first.append(1)
    history.add_listener(cb)
    history.add_listener(lambda: second.append(1))
    history.add_stroke(strokes["A"])
    history.remove_listener(cb)
    history.add_stroke(strokes["B"])
    assert len(first) == 1
    assert len(second) == 2
    
    added = []
    history.on_change(lambda: added.append(1))
    history.clear()
    # on_change adds a listener; earlier ones keep firing
    assert len(second) == 3
    assert added == [1]

@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        StrokeHistory(capacity)

def test_committed_stroke_is_immutable(strokes):
    stroke = strokes["A"]
    with pytest.raises(AttributeError):
        stroke.size = 10.0
    assert isinstance(stroke.points, tuple)
