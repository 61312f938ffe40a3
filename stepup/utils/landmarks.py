from typing import Dict, Optional, Sequence


class LandmarkMapper:
    """
    Step-Up Counter — Landmark Mapper

    Resolves the lower-body joints of the 33-point MediaPipe scheme and
    decides whether a landmark set is complete enough to classify.
    """

    def __init__(
        self,
        left: Optional[Dict[str, int]] = None,
        right: Optional[Dict[str, int]] = None,
        min_landmarks: int = 33,
    ):
        self.left = dict(left or {"hip": 23, "knee": 25, "ankle": 27})
        self.right = dict(right or {"hip": 24, "knee": 26, "ankle": 28})
        self.min_landmarks = min_landmarks

    @classmethod
    def from_config(cls, cfg):
        return cls(
            left=cfg.landmarks.left.model_dump(),
            right=cfg.landmarks.right.model_dump(),
            min_landmarks=cfg.landmarks.min_count,
        )

    # -----------------------------------------------------
    # Completeness guard
    # -----------------------------------------------------

    def required_indices(self):
        return sorted(set(self.left.values()) | set(self.right.values()))

    def is_complete(self, lm: Optional[Sequence]) -> bool:
        if lm is None or len(lm) < self.min_landmarks:
            return False
        return all(
            idx < len(lm) and lm[idx] is not None
            for idx in self.required_indices()
        )

    # -----------------------------------------------------
    # Leg triplets (hip, knee, ankle)
    # -----------------------------------------------------

    def left_leg(self, lm):
        return lm[self.left["hip"]], lm[self.left["knee"]], lm[self.left["ankle"]]

    def right_leg(self, lm):
        return lm[self.right["hip"]], lm[self.right["knee"]], lm[self.right["ankle"]]
