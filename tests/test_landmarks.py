import math
import pytest

from tracking.landmarks import LandmarkSet, NUM_LANDMARKS


def test_accepts_21_points():
    lm = LandmarkSet([(0.1, 0.2, 0.3)] * NUM_LANDMARKS)
    assert len(lm) == 21
    assert lm.get(8) == (0.1, 0.2, 0.3)
    assert lm.index_tip == (0.1, 0.2, 0.3)

def test_two_coordinate_points_get_zero_depth():
    lm = LandmarkSet([(0.1, 0.2)] * NUM_LANDMARKS)
    assert lm.get(0) == (0.1, 0.2, 0.0)

@pytest.mark.parametrize("count", [0, 5, 20, 22])
def test_wrong_count_rejected(count):
    with pytest.raises(ValueError):
        LandmarkSet([(0.5, 0.5, 0.0)] * count)
    assert LandmarkSet.parse([(0.5, 0.5, 0.0)] * count) is None

def test_non_finite_rejected():
    points = [(0.5, 0.5, 0.0)] * NUM_LANDMARKS
    points[8] = (math.nan, 0.5, 0.0)
    assert LandmarkSet.parse(points) is None

def test_parse_handles_garbage():
    assert LandmarkSet.parse(None) is None
    assert LandmarkSet.parse(42) is None
    assert LandmarkSet.parse(["abc"] * NUM_LANDMARKS) is None
    assert LandmarkSet.parse([(1, 2, 3, 4)] * NUM_LANDMARKS) is None

def test_parse_passes_through_existing_set(hand):
    lm = hand(index=True)
    assert LandmarkSet.parse(lm) is lm
