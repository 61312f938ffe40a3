import math

import cv2
import numpy as np
import pytest

from stepup.models.landmark_model import Landmark


LEFT_KNEE = (0.40, 0.50)
RIGHT_KNEE = (0.60, 0.50)
SEGMENT = 0.2

# Knee angles (left, right) per posture
POSES = {
    "UP": (175.0, 172.0),
    "DOWN": (100.0, 170.0),
    "TRANSITION": (145.0, 150.0),
    "UNKNOWN": None,
}


def _leg(knee, deg):
    kx, ky = knee
    rad = math.radians(deg)
    hip = (kx, ky - SEGMENT)
    ankle = (kx + SEGMENT * math.sin(rad), ky - SEGMENT * math.cos(rad))
    return hip, ankle


def leg_pose(left_deg, right_deg, count=33):
    """33 landmarks with the requested interior knee angles."""
    lm = [Landmark(x=0.5, y=0.5, z=0.0, vis=0.9) for _ in range(count)]
    (lh, la) = _leg(LEFT_KNEE, left_deg)
    (rh, ra) = _leg(RIGHT_KNEE, right_deg)
    for idx, (x, y) in {
        23: lh, 25: LEFT_KNEE, 27: la,
        24: rh, 26: RIGHT_KNEE, 28: ra,
    }.items():
        lm[idx] = Landmark(x=x, y=y, z=0.0, vis=0.9)
    return lm


def pose_for(label):
    angles = POSES[label]
    return None if angles is None else leg_pose(*angles)


class FakeDetector:
    """Looks frames up in a script; frames are the timestamps themselves."""

    def __init__(self, script):
        self.script = script
        self.calls = []

    def detect(self, frame, timestamp_ms=None):
        self.calls.append(timestamp_ms)
        return self.script.get(frame)


class FakeSource:
    """
    Presents one entry of `times` per current_time read, then ends.
    Repeated entries model ticks faster than the video frame rate.
    """

    def __init__(self, times):
        self.times = list(times)
        self.i = -1
        self.paused = True
        self.ended = False
        self.rewinds = 0
        self.closed = False

    def play(self):
        self.paused = False

    def pause(self):
        self.paused = True

    def rewind(self):
        self.i = -1
        self.paused = True
        self.ended = False
        self.rewinds += 1

    def close(self):
        self.closed = True

    @property
    def current_time(self):
        self.i += 1
        if self.i >= len(self.times):
            self.ended = True
            self.paused = True
            return self.times[-1]
        return self.times[self.i]

    def frame(self):
        return self.times[min(self.i, len(self.times) - 1)]


def scripted(labels, repeat=1):
    """
    Build (times, detector) for a posture sequence, each frame
    presented `repeat` times.
    """
    times, script = [], {}
    for i, label in enumerate(labels):
        t = i / 30.0
        script[t] = pose_for(label)
        times.extend([t] * repeat)
    return times, FakeDetector(script)


class TimelineDetector(FakeDetector):
    """Answers by presentation time (ms) for real decoded clips."""

    def __init__(self, labels, fps=30.0):
        super().__init__({
            int(round(i / fps * 1000)): pose_for(label)
            for i, label in enumerate(labels)
        })

    def detect(self, frame, timestamp_ms=None):
        assert frame is not None
        self.calls.append(timestamp_ms)
        return self.script.get(timestamp_ms)


def write_clip(path, frames=6, fps=30.0):
    """MJPG clip of `frames` flat-gray frames; False if OpenCV can't write."""
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (64, 48))
    if not writer.isOpened():
        return False
    for i in range(frames):
        writer.write(np.full((48, 64, 3), i * 40, dtype=np.uint8))
    writer.release()
    return True


@pytest.fixture
def clip(tmp_path):
    """Six-frame 30 fps MJPG clip."""
    path = tmp_path / "clip.avi"
    if not write_clip(path):
        pytest.skip("OpenCV build cannot write MJPG")
    return str(path)
