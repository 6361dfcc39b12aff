import numpy as np
import pytest

from slopecraft.optichain import OptiChain, Region, RegionType


def _compress(base, high, low):
    chain = OptiChain(base, high, low)
    chain.divide_and_compress()
    return chain.high_line(), chain.low_line()


def test_region_default_is_invalid():
    region = Region()
    assert not region.is_valid()
    assert str(region) == "{-1,-1}"


def test_region_string_forms():
    assert str(Region(2, 5, RegionType.HANG)) == "[2,5]"
    assert str(Region(2, 5, RegionType.IDP)) == "(2,5)"
    assert str(Region(5, 2, RegionType.IDP)) == "{5,2}"


def test_region_kind_predicates():
    hang = Region(1, 1, RegionType.HANG)
    idp = Region(1, 1, RegionType.IDP)
    assert hang.is_hang() and not hang.is_idp()
    assert idp.is_idp() and not idp.is_hang()
    assert hang.size() == 1


def test_region_index_round_trip():
    region = Region(7, 20, RegionType.IDP)
    for local in range(region.size()):
        assert region.global_to_local(region.local_to_global(local)) == local
    assert region.local_to_global(0) == 7


def test_mismatched_lengths_raise():
    with pytest.raises(ValueError):
        OptiChain([1, 1, 1], [0, 1], [0, 1])


def test_staircase_is_unchanged():
    heights = np.arange(6)
    high, low = _compress(np.full(6, 11), heights, heights)
    assert np.array_equal(high, heights)
    assert np.array_equal(low, heights)


def test_short_region_sinks_to_zero():
    heights = np.full(3, 5)
    high, low = _compress(np.full(3, 11), heights, heights)
    assert np.array_equal(high, np.zeros(3))
    assert np.array_equal(low, np.zeros(3))


def test_hanging_plateau_sinks_next_to_neighbours():
    heights = np.array([0, 3, 3, 3, 0])
    high, low = _compress(np.full(5, 11), heights, heights)
    assert np.array_equal(high, np.array([0, 1, 1, 1, 0]))
    assert np.array_equal(low, high)


def test_input_arrays_are_not_modified():
    heights = np.array([0, 3, 3, 3, 0])
    original = heights.copy()
    _compress(np.full(5, 11), heights, heights)
    assert np.array_equal(heights, original)


@pytest.mark.parametrize("seed", range(8))
def test_compression_invariants(seed):
    rng = np.random.default_rng(seed)
    n = 24
    base = rng.choice([0, 12, 5, 11, 30], size=n)
    low = rng.integers(0, 20, size=n)
    high = low + np.where(base == 12, rng.integers(0, 4, size=n), 0)
    new_high, new_low = _compress(base, high, low)
    assert np.array_equal(new_high - new_low, high - low)
    assert (new_low >= 0).all()
    assert (new_high <= high).all()
    assert (new_low <= low).all()


def test_water_column_keeps_its_depth():
    base = np.array([11, 11, 12, 11, 11])
    low = np.array([4, 5, 2, 6, 7])
    high = np.array([4, 5, 6, 6, 7])
    new_high, new_low = _compress(base, high, low)
    assert new_high[2] - new_low[2] == high[2] - low[2]
    assert new_low.min() == 0