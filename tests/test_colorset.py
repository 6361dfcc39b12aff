import numpy as np
import pytest

from slopecraft.colorset import ColorSet, base_map, compose_color
from slopecraft.colorspace import argb32, get_a


def _standard() -> ColorSet:
    standard = ColorSet()
    rows = np.arange(256, dtype=float)
    for table, offset in ((standard.rgb, 0), (standard.hsv, 1000), (standard.lab, 2000), (standard.xyz, 3000)):
        table[:, 0] = rows + offset
        table[:, 1] = rows + offset
        table[:, 2] = rows + offset
    return standard


def test_base_map_is_permutation():
    mapping = base_map()
    assert len(mapping) == 256
    assert sorted(mapping.tolist()) == list(range(256))


def test_base_map_layout():
    mapping = base_map()
    assert mapping[0] == 0
    assert mapping[1] == 4
    assert mapping[64] == 1
    assert mapping[255] == 255


def test_new_colorset_is_full_palette():
    cs = ColorSet()
    assert cs.color_count() == 256
    assert np.array_equal(cs.map, base_map())
    assert not cs.rgb.any()


def test_apply_allowed_selects_rows_in_order():
    standard = _standard()
    allowed = [False] * 256
    for index in (130, 1, 65):
        allowed[index] = True
    cs = ColorSet()
    cs.apply_allowed(standard, allowed)
    assert cs.color_count() == 3
    assert cs.rgb[:, 0].tolist() == [1.0, 65.0, 130.0]
    assert cs.lab[:, 0].tolist() == [2001.0, 2065.0, 2130.0]
    assert cs.map.tolist() == [base_map()[i] for i in (1, 65, 130)]
    assert cs.depth_count == (1, 1, 1, 0)


def test_apply_allowed_all():
    standard = _standard()
    cs = ColorSet()
    cs.apply_allowed(standard, [True] * 256)
    assert cs.color_count() == 256
    assert cs.depth_count == (64, 64, 64, 64)
    assert np.array_equal(cs.xyz, standard.xyz)


def test_apply_allowed_too_few_raises():
    allowed = [False] * 256
    allowed[5] = True
    cs = ColorSet()
    with pytest.raises(ValueError):
        cs.apply_allowed(_standard(), allowed)
    assert cs.color_count() == 1
    assert cs.map.tolist() == [0]


def test_apply_allowed_wrong_length_raises():
    with pytest.raises(ValueError):
        ColorSet().apply_allowed(_standard(), [True] * 10)


def test_compose_opaque_front_wins():
    front = argb32(10, 20, 30, 255)
    assert compose_color(front, argb32(200, 200, 200)) == front


def test_compose_transparent_front_gives_back():
    back = argb32(200, 100, 50)
    assert compose_color(argb32(10, 20, 30, 0), back) == back


def test_compose_result_is_opaque():
    result = compose_color(argb32(10, 20, 30, 100), argb32(200, 100, 50, 0))
    assert get_a(result) == 255