from enum import Enum
from pydantic import BaseModel
from typing import Optional


class PostureState(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    TRANSITION = "TRANSITION"
    UNKNOWN = "UNKNOWN"


# Display hint per posture label
POSTURE_HINTS = {
    PostureState.UP: "Top of rep",
    PostureState.DOWN: "Step engaged",
    PostureState.TRANSITION: "Mid-movement",
    PostureState.UNKNOWN: "Waiting...",
}


class Classification(BaseModel):
    """
    Per-frame classifier output.
    Angles are read-only derived values; None when the set was unusable.
    """
    state: PostureState = PostureState.UNKNOWN
    left_angle: Optional[float] = None
    right_angle: Optional[float] = None
    knee_angle: Optional[float] = None
