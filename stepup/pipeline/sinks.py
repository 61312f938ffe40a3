# stepup/pipeline/sinks.py
"""
Rendering sinks.

The scheduler pushes read-only values; sinks never feed back:
- on_landmarks(landmarks) : every processed tick ([] when no body)
- on_state(snapshot)      : whenever count / label / angle / phase change
- on_complete(snapshot)   : once, when the video ends
"""

from typing import List, Optional

from stepup.models.landmark_model import LandmarkSet
from stepup.models.session_model import RepEvent, SessionSnapshot
from stepup.utils.logger import debug, log


class RenderSink:

    def on_landmarks(self, landmarks: LandmarkSet) -> None:
        pass

    def on_state(self, snapshot: SessionSnapshot) -> None:
        pass

    def on_complete(self, snapshot: SessionSnapshot) -> None:
        pass


class SnapshotRecorder(RenderSink):
    """Keeps the latest snapshot and a timeline of completed reps."""

    def __init__(self):
        self.latest: Optional[SessionSnapshot] = None
        self.landmarks: LandmarkSet = []
        self.reps: List[RepEvent] = []
        self.completed = 0

    def on_landmarks(self, landmarks):
        self.landmarks = landmarks

    def on_state(self, snapshot):
        if snapshot.rep_count < len(self.reps):
            # counter was reset
            self.reps = []
        if snapshot.rep_count > len(self.reps):
            self.reps.append(
                RepEvent(rep=snapshot.rep_count, timestamp=snapshot.timestamp or 0.0)
            )
        self.latest = snapshot

    def on_complete(self, snapshot):
        self.completed += 1
        self.latest = snapshot


class LoggingSink(RenderSink):

    def on_state(self, snapshot):
        angle = f"{snapshot.knee_angle:.1f}°" if snapshot.knee_angle is not None else "--"
        label = snapshot.label.value if snapshot.label else "–"
        debug(
            f"[DEBUG][STATE] t={snapshot.timestamp} reps={snapshot.rep_count} "
            f"label={label} knee={angle} phase={snapshot.phase.value}"
        )

    def on_complete(self, snapshot):
        log(f"[INFO] Session: {snapshot.summary}")
