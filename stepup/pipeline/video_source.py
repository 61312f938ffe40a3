# stepup/pipeline/video_source.py
"""
Video playback boundary.

A video source exposes what the scheduler polls each tick:
    current_time  -> timestamp (s) of the frame currently presented
    paused, ended -> playback flags
    frame()       -> the presented frame (BGR ndarray)
    play(), pause(), rewind()

CaptureVideoSource presents decoded frames against a playback clock.
When ticks arrive faster than the video frame rate the same frame (and
the exact same timestamp) is presented on consecutive ticks.
"""

import time

import cv2

from stepup.models.video_model import VideoModel
from stepup.utils.logger import log

DEFAULT_FPS = 25.0


class VideoSourceError(RuntimeError):
    pass


class SteppingClock:
    """
    Deterministic clock for offline analysis: every read advances by one
    display interval, so playback runs as fast as ticks are issued.
    """

    def __init__(self, interval: float):
        self.interval = interval
        self.now = 0.0

    def __call__(self) -> float:
        t = self.now
        self.now += self.interval
        return t


class CaptureVideoSource:

    def __init__(self, file_path: str, clock=time.monotonic):
        self.file_path = file_path
        self.clock = clock

        self.cap = cv2.VideoCapture(file_path)
        if not self.cap.isOpened():
            raise VideoSourceError(f"Unable to open file: {file_path}")

        fps = self.cap.get(cv2.CAP_PROP_FPS)
        self.fps = fps if fps and fps > 0 else DEFAULT_FPS
        self.frame_count = int(self.cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

        self._index = -1
        self._frame = None
        self._position = 0.0
        self._started_at = None
        self.paused = True
        self.ended = False

    # -----------------------------------------------------
    # Playback control
    # -----------------------------------------------------

    def play(self):
        if self.ended:
            self.rewind()
        self._started_at = self.clock()
        self.paused = False

    def pause(self):
        if not self.paused:
            self._position = self._playhead()
        self._started_at = None
        self.paused = True

    def rewind(self):
        self.cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
        self._index = -1
        self._frame = None
        self._position = 0.0
        self._started_at = None
        self.paused = True
        self.ended = False

    def close(self):
        self.cap.release()

    # -----------------------------------------------------
    # Presentation
    # -----------------------------------------------------

    def _playhead(self) -> float:
        if self._started_at is None:
            return self._position
        return self._position + (self.clock() - self._started_at)

    def _present(self):
        """Decode forward until the frame under the playhead is presented."""
        target = int(self._playhead() * self.fps + 1e-9)
        while self._index < target:
            ok, frame = self.cap.read()
            if not ok:
                self.ended = True
                self.paused = True
                log(f"[INFO] VideoSource: ended after {self._index + 1} frames")
                break
            self._frame = frame
            self._index += 1

    @property
    def current_time(self) -> float:
        if not self.paused and not self.ended:
            self._present()
        return max(self._index, 0) / self.fps

    def frame(self):
        return self._frame

    def metadata(self) -> VideoModel:
        return VideoModel(
            file_path=self.file_path,
            frame_count=self.frame_count,
            fps=self.fps,
            duration_sec=self.frame_count / self.fps if self.fps > 0 else 0.0,
            width=self.width,
            height=self.height,
        )
