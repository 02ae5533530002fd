"""
Gesture classification from hand landmarks.
Maps one frame's finger extension state to a drawing mode.
"""
from enum import Enum
from typing import Optional

from .landmarks import LandmarkSet


class Mode(Enum):
    """Drawing modes derived from a single hand pose."""
    NONE = "none"     # Ambiguous pose or no hand
    PAUSE = "pause"   # Fist
    DRAW = "draw"     # Index finger up
    ERASE = "erase"   # Peace sign

    @property
    def is_active(self) -> bool:
        """True for modes that lay down or remove ink."""
        return self in (Mode.DRAW, Mode.ERASE)


def is_extended(landmarks: LandmarkSet, tip: int) -> bool:
    """
    Check whether the finger ending at `tip` is extended.
    
    Image coordinates grow downwards, so an extended finger has its tip
    above (smaller y than) its PIP joint two indices earlier.
    """
    return landmarks.get(tip)[1] < landmarks.get(tip - 2)[1]


def classify(landmarks: Optional[LandmarkSet]) -> Mode:
    """
    Classify a hand pose.
    
    Rules are evaluated in order, first match wins:
    - PAUSE: index, middle, ring and pinky all curled
    - ERASE: index and middle extended, ring and pinky curled
    - DRAW: index extended, middle curled (ring/pinky ignored)
    - NONE: anything else, or no hand
    
    Args:
        landmarks: Landmarks for the current frame, or None if no hand
    
    Returns:
        The detected Mode. Pure function of the current frame.
    """
    if landmarks is None:
        return Mode.NONE
    
    index = is_extended(landmarks, LandmarkSet.INDEX_TIP)
    middle = is_extended(landmarks, LandmarkSet.MIDDLE_TIP)
    ring = is_extended(landmarks, LandmarkSet.RING_TIP)
    pinky = is_extended(landmarks, LandmarkSet.PINKY_TIP)
    
    if not (index or middle or ring or pinky):
        return Mode.PAUSE
    if index and middle and not ring and not pinky:
        return Mode.ERASE
    if index and not middle:
        return Mode.DRAW
    return Mode.NONE
