# stepup/pipeline/capability.py
"""
Pose capability handle.

Status is resolved exactly once:
    loading → ready(detector)
    loading → error(reason)
and never goes back. The scheduler gates every tick on `is_ready`.

A detector is any object exposing
    detect(frame, timestamp_ms) -> Optional[LandmarkSet]
returning None (or an empty list) when no body is visible.
"""

import threading
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from stepup.utils.logger import error, log


class CapabilityError(RuntimeError):
    pass


class NotReady(BaseModel):
    model_config = ConfigDict(frozen=True)
    status: Literal["loading"] = "loading"


class Ready(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
    status: Literal["ready"] = "ready"
    detector: Any


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)
    status: Literal["error"] = "error"
    reason: str


CapabilityStatus = Union[NotReady, Ready, Failed]


class PoseCapability:

    def __init__(self):
        self._status: CapabilityStatus = NotReady()
        self._lock = threading.Lock()

    # -----------------------------------------------------
    # Status accessors
    # -----------------------------------------------------

    @property
    def status(self) -> CapabilityStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return isinstance(self._status, Ready)

    @property
    def detector(self):
        if isinstance(self._status, Ready):
            return self._status.detector
        return None

    @property
    def message(self) -> str:
        if isinstance(self._status, Failed):
            return f"Error: {self._status.reason}"
        if isinstance(self._status, NotReady):
            return "Initialising…"
        return ""

    # -----------------------------------------------------
    # One-shot transitions
    # -----------------------------------------------------

    def _resolve(self, status: CapabilityStatus) -> None:
        with self._lock:
            if not isinstance(self._status, NotReady):
                raise CapabilityError(
                    f"Pose capability already resolved ({self._status.status})"
                )
            self._status = status

    def mark_ready(self, detector) -> None:
        self._resolve(Ready(detector=detector))
        log("[INFO] Capability: pose detector ready")

    def mark_failed(self, reason: str) -> None:
        self._resolve(Failed(reason=reason))
        error(f"[ERROR] Capability: {reason}")

    def load(self, factory: Callable[[], Any]) -> "PoseCapability":
        """
        Build the detector once. Any exception becomes a persistent
        Failed status; there is no automatic retry.
        """
        log("[INFO] Capability: loading pose detector")
        try:
            detector = factory()
        except Exception as e:
            self.mark_failed(str(e) or type(e).__name__)
            return self
        self.mark_ready(detector)
        return self

    def close(self) -> None:
        det = self.detector
        if det is not None and hasattr(det, "close"):
            det.close()


def ready(detector) -> PoseCapability:
    cap = PoseCapability()
    cap.mark_ready(detector)
    return cap


def failed(reason: Optional[str]) -> PoseCapability:
    cap = PoseCapability()
    cap.mark_failed(reason or "unknown error")
    return cap
