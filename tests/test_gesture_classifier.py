import pytest

from tracking.gesture_classifier import Mode, classify, is_extended
from tracking.landmarks import LandmarkSet


def test_fist_is_pause(hand):
    assert classify(hand()) == Mode.PAUSE

def test_peace_sign_is_erase(hand):
    assert classify(hand(index=True, middle=True)) == Mode.ERASE

def test_index_only_is_draw(hand):
    assert classify(hand(index=True)) == Mode.DRAW

@pytest.mark.parametrize("ring,pinky", [(True, False), (False, True), (True, True)])
def test_draw_ignores_ring_and_pinky(hand, ring, pinky):
    assert classify(hand(index=True, ring=ring, pinky=pinky)) == Mode.DRAW

@pytest.mark.parametrize("fingers", [
    dict(middle=True),
    dict(index=True, middle=True, ring=True),
    dict(index=True, middle=True, pinky=True),
    dict(index=True, middle=True, ring=True, pinky=True),
    dict(ring=True, pinky=True),
])
def test_ambiguous_poses_are_none(hand, fingers):
    assert classify(hand(**fingers)) == Mode.NONE

def test_no_hand_is_none():
    assert classify(None) == Mode.NONE

def test_closed_hand_never_none(hand):
    # Pause is checked first, so a fully closed hand cannot fall through
    lm = hand()
    assert not any(is_extended(lm, t) for t in (8, 12, 16, 20))
    assert classify(lm) == Mode.PAUSE

def test_is_extended_uses_pip_two_below(hand):
    lm = hand(index=True, tip=(0.3, 0.2))
    assert is_extended(lm, LandmarkSet.INDEX_TIP)
    assert not is_extended(lm, LandmarkSet.MIDDLE_TIP)

def test_mode_is_active():
    assert Mode.DRAW.is_active
    assert Mode.ERASE.is_active
    assert not Mode.PAUSE.is_active
    assert not Mode.NONE.is_active
