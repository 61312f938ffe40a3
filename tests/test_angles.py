import pytest

from stepup.models.landmark_model import Landmark
from stepup.utils.angles import angle, mean_angle


def test_right_angle():
    assert angle((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)


def test_opposed_points_give_180():
    assert angle((-1, 0), (0, 0), (1, 0)) == pytest.approx(180.0)


def test_same_direction_gives_0():
    assert angle((1, 0), (0, 0), (2, 0)) == pytest.approx(0.0, abs=1e-6)


def test_symmetric_in_outer_points():
    a, b, c = (0.2, 0.9), (0.5, 0.5), (0.9, 0.7)
    assert angle(a, b, c) == pytest.approx(angle(c, b, a))


@pytest.mark.parametrize("a, c", [((0.5, 0.5), (1, 1)), ((1, 1), (0.5, 0.5))])
def test_vertex_coincident_with_endpoint_is_zero(a, c):
    assert angle(a, (0.5, 0.5), c) == 0.0


def test_z_is_ignored():
    a = Landmark(x=1.0, y=0.0, z=5.0)
    b = Landmark(x=0.0, y=0.0, z=-3.0)
    c = Landmark(x=0.0, y=1.0, z=0.0)
    assert angle(a, b, c) == pytest.approx(90.0)


def test_accepts_dict_landmarks():
    a = {"x": 0.0, "y": 1.0, "z": 0.0, "vis": 1.0}
    b = {"x": 0.0, "y": 0.0}
    c = {"x": 1.0, "y": 1.0}
    assert angle(a, b, c) == pytest.approx(45.0)


def test_result_within_bounds():
    # nearly collinear values must not escape acos domain
    val = angle((0.1, 0.1), (0.2, 0.2), (0.3, 0.3000000001))
    assert 0.0 <= val <= 180.0


def test_mean_angle():
    assert mean_angle(170.0, 150.0) == 160.0
    assert mean_angle(100.04, 100.0) == 100.0
    assert mean_angle(None, 120.0) is None
