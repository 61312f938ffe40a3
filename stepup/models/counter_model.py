from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from stepup.models.posture_model import PostureState


class CounterPhase(str, Enum):
    # committed UP, waiting for a full DOWN commit
    AWAITING_DOWN = "AWAITING_DOWN"
    # committed DOWN, next UP commit completes a rep
    READY_TO_COUNT = "READY_TO_COUNT"


class CounterState(BaseModel):
    """
    The only state carried across frames.

    committed_posture and armed are both derived from the single
    phase field, so they cannot fall out of sync.
    """
    model_config = ConfigDict(frozen=True)

    phase: CounterPhase = CounterPhase.AWAITING_DOWN
    rep_count: int = Field(default=0, ge=0)

    @property
    def committed_posture(self) -> PostureState:
        if self.phase == CounterPhase.READY_TO_COUNT:
            return PostureState.DOWN
        return PostureState.UP

    @property
    def armed(self) -> bool:
        return self.phase == CounterPhase.READY_TO_COUNT
