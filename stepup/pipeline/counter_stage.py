# stepup/pipeline/counter_stage.py
"""
Step-Up Counter — REPETITION COUNTER

Edge-triggered: a rep is counted when an UP commit follows a DOWN
commit. TRANSITION / UNKNOWN frames are transparent no-ops, so any
number of mid-movement or missing frames between the two extremes
still yields exactly one rep.
"""

from stepup.models.counter_model import CounterPhase, CounterState
from stepup.models.posture_model import PostureState
from stepup.utils.logger import debug, log


class RepCounter:

    def __init__(self):
        self._state = CounterState()

    @property
    def state(self) -> CounterState:
        return self._state

    @property
    def rep_count(self) -> int:
        return self._state.rep_count

    def update(self, posture: PostureState) -> bool:
        """
        Advance by one classified frame.
        Returns True when this frame completed a repetition.
        """
        phase = self._state.phase

        if phase == CounterPhase.AWAITING_DOWN and posture == PostureState.DOWN:
            self._state = CounterState(
                phase=CounterPhase.READY_TO_COUNT,
                rep_count=self._state.rep_count,
            )
            debug("[DEBUG][COUNTER] committed DOWN (armed)")
            return False

        if phase == CounterPhase.READY_TO_COUNT and posture == PostureState.UP:
            self._state = CounterState(
                phase=CounterPhase.AWAITING_DOWN,
                rep_count=self._state.rep_count + 1,
            )
            log(f"[INFO] Counter: rep {self._state.rep_count} completed")
            return True

        return False

    def reset(self) -> None:
        self._state = CounterState()
