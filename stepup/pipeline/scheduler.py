# stepup/pipeline/scheduler.py
"""
Step-Up Counter — FRAME SCHEDULER
---------------------------------

Drives Geometry → Classifier → Counter at the cadence of newly
presented video frames.

Per tick:
- capability not ready      → GATED      (no-op, loop stops)
- video ended               → COMPLETED  (completion signalled once)
- video paused              → STOPPED
- timestamp already handled → DUPLICATE  (skip, keep looping)
- otherwise                 → PROCESSED  (detect, classify, count)

At most one classification per distinct presented frame. tick() and
reset() are serialized on one lock, so reset may be called from any
thread while run() is looping.
"""

import threading
import time
from enum import Enum
from typing import Iterable, Optional

from stepup.models.config_model import CounterConfig
from stepup.models.counter_model import CounterState
from stepup.models.posture_model import POSTURE_HINTS, Classification
from stepup.models.session_model import SessionPhase, SessionSnapshot
from stepup.pipeline.capability import PoseCapability
from stepup.pipeline.classifier_stage import PostureClassifier
from stepup.pipeline.counter_stage import RepCounter
from stepup.utils.logger import debug, log, warn


class TickOutcome(str, Enum):
    GATED = "gated"
    STOPPED = "stopped"
    COMPLETED = "completed"
    DUPLICATE = "duplicate"
    PROCESSED = "processed"

    @property
    def reschedule(self) -> bool:
        return self in (TickOutcome.DUPLICATE, TickOutcome.PROCESSED)


class FrameScheduler:

    def __init__(
        self,
        capability: PoseCapability,
        source=None,
        cfg: Optional[CounterConfig] = None,
        sinks: Optional[Iterable] = None,
        sleep=time.sleep,
    ):
        cfg = cfg or CounterConfig()
        self.capability = capability
        self.source = source
        self.classifier = PostureClassifier(cfg)
        self.counter = RepCounter()
        self.sinks = list(sinks or [])
        self.interval = 1.0 / cfg.scheduler.display_hz
        self.sleep = sleep

        self._lock = threading.RLock()
        self._last_time: Optional[float] = None
        self._classification: Optional[Classification] = None
        self._completed = False
        self._emitted: Optional[dict] = None
        self.phase = SessionPhase.READY if source is not None else SessionPhase.IDLE

        self.ticks = 0
        self.processed_frames = 0
        self.duplicate_ticks = 0

    # -----------------------------------------------------
    # Observable state
    # -----------------------------------------------------

    @property
    def counter_state(self) -> CounterState:
        return self.counter.state

    @property
    def last_time(self) -> Optional[float]:
        return self._last_time

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            c = self._classification
            state = self.counter.state
            return SessionSnapshot(
                rep_count=state.rep_count,
                label=c.state if c else None,
                hint=POSTURE_HINTS[c.state] if c else None,
                knee_angle=c.knee_angle if c else None,
                phase=self.phase,
                timestamp=self._last_time,
                committed_posture=state.committed_posture,
                armed=state.armed,
            )

    def _emit_state(self):
        snap = self.snapshot()
        key = snap.model_dump(exclude={"timestamp"})
        if key == self._emitted:
            return
        self._emitted = key
        for s in self.sinks:
            s.on_state(snap)

    # -----------------------------------------------------
    # Tick
    # -----------------------------------------------------

    def tick(self) -> TickOutcome:
        with self._lock:
            self.ticks += 1

            if not self.capability.is_ready or self.source is None:
                return TickOutcome.GATED

            if self.source.ended:
                self._finish()
                return TickOutcome.COMPLETED

            if self.source.paused:
                return TickOutcome.STOPPED

            t = self.source.current_time
            if t == self._last_time:
                self.duplicate_ticks += 1
                debug(f"[DEBUG][SCHED] duplicate frame t={t:.3f}, skipped")
                return TickOutcome.DUPLICATE

            self._last_time = t
            self._process(t)
            return TickOutcome.PROCESSED

    def _process(self, t: float):
        frame = self.source.frame()
        try:
            landmarks = self.capability.detector.detect(frame, int(round(t * 1000)))
        except Exception as e:
            warn(f"[WARN] Scheduler: detection failed at t={t:.3f}: {e}")
            landmarks = None

        self._classification = self.classifier.classify(landmarks or None)
        self.counter.update(self._classification.state)
        self.processed_frames += 1

        for s in self.sinks:
            s.on_landmarks(landmarks or [])
        self._emit_state()

    def run(self, max_ticks: Optional[int] = None) -> TickOutcome:
        """
        Self-rescheduling loop: one tick per display interval until a
        tick says not to reschedule (or max_ticks is reached).
        """
        outcome = TickOutcome.GATED
        n = 0
        while max_ticks is None or n < max_ticks:
            outcome = self.tick()
            n += 1
            if not outcome.reschedule:
                break
            self.sleep(self.interval)
        return outcome

    # -----------------------------------------------------
    # Playback notifications
    # -----------------------------------------------------

    def start(self):
        """Start playback and mark the session running."""
        with self._lock:
            if self.source is None:
                return
            self.source.play()
        self.on_play()

    def pause(self):
        """Pause playback; the next tick stops the loop."""
        with self._lock:
            if self.source is None:
                return
            self.source.pause()
        self.on_pause()

    def on_play(self):
        with self._lock:
            self.phase = SessionPhase.RUNNING
            self._emit_state()
        log("[INFO] Scheduler: playback started")

    def on_pause(self):
        log(f"[INFO] Scheduler: playback paused at t={self._last_time}")

    def on_ended(self):
        with self._lock:
            self._finish()

    def _finish(self):
        self.phase = SessionPhase.DONE
        if self._completed:
            return
        self._completed = True
        snap = self.snapshot()
        self._emit_state()
        for s in self.sinks:
            s.on_complete(snap)
        log(f"[INFO] Scheduler: {snap.summary}")

    # -----------------------------------------------------
    # Reset / new video / teardown
    # -----------------------------------------------------

    def reset(self):
        with self._lock:
            self.counter.reset()
            self._last_time = None
            self._classification = None
            self._completed = False
            if self.source is not None:
                self.source.rewind()
            self.phase = SessionPhase.READY if self.source is not None else SessionPhase.IDLE
            self._emit_state()
        log("[INFO] Scheduler: reset")

    def load_video(self, source):
        with self._lock:
            previous = self.source
            if previous is not None and previous is not source:
                previous.close()
            self.source = source
            self.ticks = 0
            self.processed_frames = 0
            self.duplicate_ticks = 0
            self.reset()

    def close(self):
        """
        Release the video source. The counter and last snapshot stay
        readable; a later reset() returns the session to idle.
        """
        with self._lock:
            if self.source is not None:
                self.source.close()
                self.source = None
