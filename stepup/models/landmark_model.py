from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Landmark(BaseModel):
    """
    One estimated body joint in normalized image space (0..1).
    Immutable once produced by the pose model.
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: Optional[float] = None
    vis: Optional[float] = None


# One detected body in one frame, indexed by the 33-point scheme.
LandmarkSet = List[Landmark]
