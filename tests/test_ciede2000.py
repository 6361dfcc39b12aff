import math

import pytest

from slopecraft.ciede2000 import lab00


@pytest.mark.parametrize("lab", [(50.0, 0.0, 0.0), (30.0, 20.0, -40.0), (80.0, -5.0, 60.0)])
def test_identical_colours_have_zero_difference(lab):
    assert lab00(*lab, *lab) == pytest.approx(0.0, abs=1e-12)


def test_published_reference_pair():
    diff = lab00(50.0, 2.6772, -79.7751, 50.0, 0.0, -82.7485)
    assert math.sqrt(diff) == pytest.approx(2.0425, abs=1e-3)


@pytest.mark.parametrize(
    "first,second",
    [
        ((50.0, 2.5, 0.0), (50.0, 0.0, -2.5)),
        ((60.0, -30.0, 10.0), (40.0, 25.0, -15.0)),
        ((20.0, 5.0, 5.0), (90.0, -60.0, 40.0)),
    ],
)
def test_symmetric(first, second):
    assert lab00(*first, *second) == pytest.approx(lab00(*second, *first), rel=1e-9)


def test_larger_lightness_gap_gives_larger_difference():
    near = lab00(50.0, 0.0, 0.0, 55.0, 0.0, 0.0)
    far = lab00(50.0, 0.0, 0.0, 70.0, 0.0, 0.0)
    assert 0 < near < far


def test_returns_square_of_distance():
    diff = lab00(50.0, 10.0, 10.0, 50.0, -10.0, -10.0)
    assert diff > 0
    assert math.sqrt(diff) ** 2 == pytest.approx(diff)