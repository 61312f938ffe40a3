# stepup/pipeline/classifier_stage.py
"""
Step-Up Counter — POSTURE CLASSIFIER
------------------------------------

Maps one landmark set to UP / DOWN / TRANSITION / UNKNOWN.

Rules:
- UP    : both knees extended past up_deg (min > up_deg)
- DOWN  : at least one knee bent past down_deg (min < down_deg)
- else  : TRANSITION (dead-zone between the two thresholds)
- Missing body or joints → UNKNOWN, never an exception
"""

from typing import Optional

from stepup.models.config_model import CounterConfig
from stepup.models.landmark_model import LandmarkSet
from stepup.models.posture_model import Classification, PostureState
from stepup.utils.angles import angle, mean_angle
from stepup.utils.landmarks import LandmarkMapper


class PostureClassifier:

    def __init__(self, cfg: Optional[CounterConfig] = None):
        cfg = cfg or CounterConfig()
        self.up_deg = cfg.thresholds.up_deg
        self.down_deg = cfg.thresholds.down_deg
        self.mapper = LandmarkMapper.from_config(cfg)

    def classify(self, lm: Optional[LandmarkSet]) -> Classification:
        if not self.mapper.is_complete(lm):
            return Classification(state=PostureState.UNKNOWN)

        left = angle(*self.mapper.left_leg(lm))
        right = angle(*self.mapper.right_leg(lm))

        return Classification(
            state=self.state_for(left, right),
            left_angle=left,
            right_angle=right,
            knee_angle=mean_angle(left, right),
        )

    def state_for(self, left: float, right: float) -> PostureState:
        lowest = min(left, right)
        if lowest > self.up_deg:
            return PostureState.UP
        if lowest < self.down_deg:
            return PostureState.DOWN
        return PostureState.TRANSITION


def classify(lm: Optional[LandmarkSet], cfg: Optional[CounterConfig] = None) -> Classification:
    return PostureClassifier(cfg).classify(lm)
