import pytest

from slopecraft.colorset import ColorSet, base_map
from slopecraft.colorspace import THRESHOLD, argb32, rgb_to_hsv, rgb_to_xyz, xyz_to_lab
from slopecraft.enums import ConvertAlgo
from slopecraft.matcher import NO_SIDE, ColorMatcher, MatchResult, to_color_space

BASIC = {
    1: (255, 32, 32),
    2: (32, 128, 32),
    3: (32, 32, 64),
    4: (200, 200, 200),
}

ALGOS = [
    ConvertAlgo.RGB,
    ConvertAlgo.RGB_BETTER,
    ConvertAlgo.HSV,
    ConvertAlgo.XYZ,
    ConvertAlgo.LAB94,
    ConvertAlgo.LAB00,
]


def make_allowed(palette):
    standard = ColorSet()
    mask = [False] * 256
    for row, (r, g, b) in palette.items():
        rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
        standard.rgb[row] = (rf, gf, bf)
        standard.hsv[row] = rgb_to_hsv(rf, gf, bf)
        standard.xyz[row] = rgb_to_xyz(rf, gf, bf)
        standard.lab[row] = xyz_to_lab(*standard.xyz[row])
        mask[row] = True
    allowed = ColorSet()
    allowed.apply_allowed(standard, mask)
    return allowed


@pytest.mark.parametrize("algo", ALGOS)
@pytest.mark.parametrize("row", sorted(BASIC))
def test_exact_colour_matches_its_row(algo, row):
    matcher = ColorMatcher(make_allowed(BASIC), algo)
    found = matcher.match(argb32(*BASIC[row]))
    assert found.result == base_map()[row]


@pytest.mark.parametrize("algo", ALGOS)
def test_result_is_always_an_allowed_colour(algo):
    allowed = make_allowed(BASIC)
    matcher = ColorMatcher(allowed, algo)
    ids = {int(v) for v in allowed.map}
    for argb in (argb32(0, 0, 0), argb32(255, 255, 255), argb32(10, 200, 90), argb32(90, 10, 240)):
        assert matcher.match(argb).result in ids


def test_rgb_exact_difference_is_threshold():
    matcher = ColorMatcher(make_allowed(BASIC), ConvertAlgo.RGB)
    found = matcher.match(argb32(*BASIC[2]))
    assert found.result_diff == pytest.approx(THRESHOLD, rel=1e-6)


def test_transparent_maps_to_zero():
    matcher = ColorMatcher(make_allowed(BASIC), ConvertAlgo.RGB_BETTER)
    assert matcher.match(argb32(10, 10, 10, 0)) == MatchResult(0, 0.0)


def test_sides_not_searched_by_default():
    matcher = ColorMatcher(make_allowed(BASIC), ConvertAlgo.RGB)
    found = matcher.match(argb32(*BASIC[1]))
    assert found.side_result == (0, 0)
    assert found.side_selectivity == (NO_SIDE, NO_SIDE)


SIDED = {
    1: (255, 32, 32),
    65: (128, 32, 32),
    66: (32, 200, 32),
    129: (180, 32, 32),
    130: (32, 32, 200),
}


def test_sides_at_depth_zero():
    matcher = ColorMatcher(make_allowed(SIDED), ConvertAlgo.RGB, need_find_side=True)
    found = matcher.match(argb32(*SIDED[1]))
    bm = base_map()
    assert found.result == bm[1]
    assert found.side_result == (bm[65], bm[129])
    assert all(sel >= found.result_diff - THRESHOLD for sel in found.side_selectivity)


def test_sides_at_depth_one():
    matcher = ColorMatcher(make_allowed(SIDED), ConvertAlgo.RGB, need_find_side=True)
    found = matcher.match(argb32(*SIDED[65]))
    bm = base_map()
    assert found.result == bm[65]
    assert found.side_result == (bm[1], bm[129])


def test_no_sides_for_depth_three():
    palette = {1: (255, 32, 32), 193: (32, 32, 220)}
    matcher = ColorMatcher(make_allowed(palette), ConvertAlgo.RGB, need_find_side=True)
    found = matcher.match(argb32(*palette[193]))
    assert found.result % 4 == 3
    assert found.side_selectivity == (1e35, 1e35)
    assert found.side_result == (0, 0)


def test_string_algo_equivalent_to_enum():
    allowed = make_allowed(BASIC)
    argb = argb32(100, 60, 30)
    assert ColorMatcher(allowed, "L").match(argb) == ColorMatcher(allowed, ConvertAlgo.LAB00).match(argb)


def test_to_color_space_rgb_clamps_zero():
    r, g, b = to_color_space(argb32(255, 0, 51), "r")
    assert r == pytest.approx(1.0)
    assert g == THRESHOLD
    assert b == pytest.approx(51 / 255)


def test_to_color_space_xyz_and_lab():
    argb = argb32(255, 0, 51)
    xyz = rgb_to_xyz(1.0, 0.0, 51 / 255)
    assert to_color_space(argb, ConvertAlgo.XYZ) == pytest.approx(xyz)
    assert to_color_space(argb, ConvertAlgo.LAB00) == pytest.approx(xyz_to_lab(*xyz))
    assert to_color_space(argb, ConvertAlgo.LAB94) == to_color_space(argb, ConvertAlgo.LAB00)


def test_unknown_algo_rejected():
    with pytest.raises(ValueError):
        to_color_space(argb32(1, 2, 3), "Z")
    with pytest.raises(ValueError):
        ColorMatcher(make_allowed(BASIC), "Z")