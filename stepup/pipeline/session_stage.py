# stepup/pipeline/session_stage.py
"""
Offline session: play a whole video through the scheduler as fast as
ticks can be issued, with a stepping clock standing in for the display
refresh. Used by POST /analyze.
"""

from typing import Optional

from stepup.models.config_model import CounterConfig
from stepup.models.session_model import SessionReport
from stepup.pipeline.capability import PoseCapability
from stepup.pipeline.scheduler import FrameScheduler
from stepup.pipeline.sinks import LoggingSink, SnapshotRecorder
from stepup.pipeline.video_source import CaptureVideoSource, SteppingClock
from stepup.utils.logger import log


def build_report(scheduler: FrameScheduler, recorder: SnapshotRecorder, video=None) -> SessionReport:
    return SessionReport(
        snapshot=scheduler.snapshot(),
        reps=list(recorder.reps),
        ticks=scheduler.ticks,
        processed_frames=scheduler.processed_frames,
        duplicate_ticks=scheduler.duplicate_ticks,
        video=video,
    )


def run(file_path: str, capability: PoseCapability, cfg: Optional[CounterConfig] = None):
    """
    Returns (report, scheduler, recorder). The video is released before
    returning; the scheduler is kept by the caller so the session can
    be inspected (or reset back to idle) afterwards.
    """
    cfg = cfg or CounterConfig()
    log(f"[INFO] SessionStage: Starting {file_path}")

    clock = SteppingClock(1.0 / cfg.scheduler.display_hz)
    source = CaptureVideoSource(file_path, clock=clock)

    recorder = SnapshotRecorder()
    scheduler = FrameScheduler(
        capability,
        source=source,
        cfg=cfg,
        sinks=[recorder, LoggingSink()],
        sleep=lambda _: None,
    )

    try:
        scheduler.start()
        scheduler.run()
        report = build_report(scheduler, recorder, video=source.metadata().model_dump())
    finally:
        scheduler.close()

    log(
        f"[INFO] SessionStage: Completed reps={report.snapshot.rep_count} "
        f"frames={report.processed_frames} duplicates={report.duplicate_ticks}"
    )
    return report, scheduler, recorder
