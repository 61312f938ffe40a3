# stepup/utils/angles.py

from typing import Optional

import numpy as np


# -----------------------------------------------------------
# POINT COERCION
# -----------------------------------------------------------

def _xy(p):
    """
    Planar (x, y) of a landmark-like value.

    Accepts Landmark models, dicts with "x"/"y" keys, or any
    sequence / array whose first two entries are x and y.
    z is always dropped.
    """
    if hasattr(p, "x") and hasattr(p, "y"):
        return np.array([p.x, p.y], float)
    if isinstance(p, dict):
        return np.array([p["x"], p["y"]], float)
    return np.asarray(p, float)[:2]


# -----------------------------------------------------------
# JOINT ANGLE
# -----------------------------------------------------------

def angle(a, b, c) -> float:
    """
    Interior angle ABC in degrees, B being the vertex.

    Computed in the image plane from BA and BC.
    Returns 0.0 when either limb segment has zero length.
    """
    ba = _xy(a) - _xy(b)
    bc = _xy(c) - _xy(b)

    mag = float(np.hypot(*ba) * np.hypot(*bc))
    if mag == 0.0:
        return 0.0

    cosang = float(np.dot(ba, bc)) / mag
    cosang = max(-1.0, min(1.0, cosang))
    return float(np.degrees(np.arccos(cosang)))


def mean_angle(left: Optional[float], right: Optional[float]) -> Optional[float]:
    """Display value for a bilateral joint pair (one decimal)."""
    if left is None or right is None:
        return None
    return round((left + right) / 2.0, 1)
