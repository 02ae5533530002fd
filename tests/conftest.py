import pytest

from tracking.landmarks import LandmarkSet


def make_landmarks(index=False, middle=False, ring=False, pinky=False, tip=(0.5, 0.4)):
    """
    Build a 21-point hand with the given fingers extended.
    
    `tip` places the index fingertip; its PIP joint is put just below
    (extended) or just above (curled) it.
    """
    points = [[0.5, 0.6, 0.0] for _ in range(21)]
    
    for tip_idx, extended in ((12, middle), (16, ring), (20, pinky)):
        points[tip_idx - 2][1] = 0.5
        points[tip_idx][1] = 0.3 if extended else 0.7
    
    tx, ty = tip
    points[LandmarkSet.INDEX_TIP] = [tx, ty, 0.0]
    points[LandmarkSet.INDEX_PIP] = [tx, ty + 0.05 if index else ty - 0.05, 0.0]
    
    return LandmarkSet(points)


@pytest.fixture
def hand():
    return make_landmarks
