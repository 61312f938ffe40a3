from enum import Enum
from pydantic import BaseModel, Field, computed_field
from typing import Any, Dict, List, Optional

from stepup.models.posture_model import PostureState


class SessionPhase(str, Enum):
    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"
    DONE = "done"


class RepEvent(BaseModel):
    rep: int
    timestamp: float


class SessionSnapshot(BaseModel):
    """
    Read-only view handed to rendering sinks and the HTTP layer.
    """
    rep_count: int = 0
    label: Optional[PostureState] = None
    hint: Optional[str] = None
    knee_angle: Optional[float] = None
    phase: SessionPhase = SessionPhase.IDLE
    timestamp: Optional[float] = None

    # Counter internals (documentation)
    committed_posture: PostureState = PostureState.UP
    armed: bool = False

    @computed_field
    @property
    def summary(self) -> Optional[str]:
        if self.phase != SessionPhase.DONE:
            return None
        plural = "" if self.rep_count == 1 else "s"
        return f"Done - {self.rep_count} step-up{plural} detected"


class SessionReport(BaseModel):
    """Result of a full offline session (POST /analyze)."""
    snapshot: SessionSnapshot
    reps: List[RepEvent] = Field(default_factory=list)
    ticks: int = 0
    processed_frames: int = 0
    duplicate_ticks: int = 0
    video: Optional[Dict[str, Any]] = None
