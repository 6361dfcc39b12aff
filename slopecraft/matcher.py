"""Matching image colours against the allowed map colours."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from slopecraft.ciede2000 import lab00
from slopecraft.colorset import ColorSet
from slopecraft.colorspace import (
    THRESHOLD,
    get_a,
    get_b,
    get_g,
    get_r,
    rgb_to_hsv,
    rgb_to_xyz,
    xyz_to_lab,
)
from slopecraft.enums import ConvertAlgo

__all__ = ["MatchResult", "ColorMatcher", "to_color_space", "NO_SIDE"]

NO_SIDE = 1e35


def to_color_space(argb: int, algo: ConvertAlgo | str) -> tuple[float, float, float]:
    """Express an ARGB colour in the colour space that ``algo`` compares in.

    Raises ValueError for an unknown algorithm.
    """
    algo = ConvertAlgo(algo)
    r = get_r(argb) / 255.0
    g = get_g(argb) / 255.0
    b = get_b(argb) / 255.0
    if algo in (ConvertAlgo.RGB, ConvertAlgo.RGB_BETTER):
        return max(r, THRESHOLD), max(g, THRESHOLD), max(b, THRESHOLD)
    if algo is ConvertAlgo.HSV:
        return rgb_to_hsv(r, g, b)
    if algo is ConvertAlgo.XYZ:
        return rgb_to_xyz(r, g, b)
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


@dataclass(frozen=True)
class MatchResult:
    """The chosen map colour and the best alternatives at other shadings.

    ``side_result`` holds, in ascending depth order, the closest colours at
    the two depths other than the result's; they are 0 with a selectivity of
    ``NO_SIDE`` when not searched or not available.
    """

    result: int
    result_diff: float
    side_result: tuple[int, int] = (0, 0)
    side_selectivity: tuple[float, float] = (NO_SIDE, NO_SIDE)


class ColorMatcher:
    """Finds the nearest allowed map colour of a pixel."""

    def __init__(
        self,
        allowed: ColorSet,
        algo: ConvertAlgo | str = ConvertAlgo.RGB_BETTER,
        need_find_side: bool = False,
    ) -> None:
        self.allowed = allowed
        self.algo = ConvertAlgo(algo)
        self.need_find_side = need_find_side
        self._distance: Callable[[np.ndarray], np.ndarray] = {
            ConvertAlgo.RGB: self._dist_rgb,
            ConvertAlgo.RGB_BETTER: self._dist_rgb_plus,
            ConvertAlgo.HSV: self._dist_hsv,
            ConvertAlgo.LAB00: self._dist_lab00,
            ConvertAlgo.LAB94: self._dist_lab94,
        }.get(self.algo, self._dist_xyz)

    def match(self, argb: int) -> MatchResult:
        """Match one ARGB colour; fully transparent colours map to 0."""
        if get_a(argb) <= 0:
            return MatchResult(0, 0.0)
        c3 = np.asarray(to_color_space(argb, self.algo), dtype=float)
        diff = self._distance(c3)
        idx = int(np.argmin(diff))
        result_diff = float(diff[idx])
        if self.algo is ConvertAlgo.RGB:
            result_diff += THRESHOLD
        result = int(self.allowed.map[idx])
        if not self.need_find_side:
            return MatchResult(result, result_diff)
        side_result, side_selectivity = self._sides(result, diff)
        return MatchResult(result, result_diff, side_result, side_selectivity)

    def _sides(self, result: int, diff: np.ndarray) -> tuple[tuple[int, int], tuple[float, float]]:
        results = [0, 0]
        selectivity = [NO_SIDE, NO_SIDE]
        depth = result % 4
        if depth == 3:
            return (0, 0), (NO_SIDE, NO_SIDE)
        counts = self.allowed.depth_count
        starts = [sum(counts[:d]) for d in range(4)]
        others = [d for d in range(3) if d != depth]
        for slot, d in enumerate(others):
            if not counts[d]:
                continue
            segment = diff[starts[d] : starts[d] + counts[d]]
            i = int(np.argmin(segment))
            selectivity[slot] = float(segment[i])
            results[slot] = int(self.allowed.map[starts[d] + i])
        return (results[0], results[1]), (selectivity[0], selectivity[1])

    def _dist_rgb(self, c3: np.ndarray) -> np.ndarray:
        return ((self.allowed.rgb - c3) ** 2).sum(axis=1)

    def _dist_xyz(self, c3: np.ndarray) -> np.ndarray:
        return ((self.allowed.xyz - c3) ** 2).sum(axis=1)

    def _dist_rgb_plus(self, c3: np.ndarray) -> np.ndarray:
        colors = self.allowed.rgb
        r, g, b = (float(v) for v in c3)
        a0, a1, a2 = colors[:, 0], colors[:, 1], colors[:, 2]
        w_r, w_g, w_b = 1.0, 2.0, 1.0
        sqr_mod = np.sqrt((r * r + g * g + b * b) * (a0**2 + a1**2 + a2**2))
        delta_r = r - a0
        delta_g = g - a1
        delta_b = b - a2
        sigma = (r + g + b + a0 + a1 + a2) / 3.0
        s_r = np.where(a0 + r < sigma, (a0 + r) / (sigma + THRESHOLD), 1.0)
        s_g = np.where(a1 + g < sigma, (a1 + g) / (sigma + THRESHOLD), 1.0)
        s_b = np.where(a2 + b < sigma, (a2 + b) / (sigma + THRESHOLD), 1.0)
        dot = r * a0 + g * a1 + b * a2
        theta = 2.0 / math.pi * np.arccos(dot / (sqr_mod + THRESHOLD) / 1.01)
        oned_r = np.abs(delta_r) / (r + a0 + THRESHOLD)
        oned_g = np.abs(delta_g) / (g + a1 + THRESHOLD)
        oned_b = np.abs(delta_b) / (b + a2 + THRESHOLD)
        sum_oned = oned_r + oned_g + oned_b + THRESHOLD
        s_theta = (
            oned_r / sum_oned * s_r**2
            + oned_g / sum_oned * s_g**2
            + oned_b / sum_oned * s_b**2
        )
        s_ratio = np.maximum(colors.max(axis=1), max(r, g, b))
        return (
            s_r**2 * w_r * delta_r**2 + s_g**2 * w_g * delta_g**2 + s_b**2 * w_b * delta_b**2
        ) / (w_r + w_g + w_b) + s_theta * s_ratio * theta**2

    def _dist_hsv(self, c3: np.ndarray) -> np.ndarray:
        colors = self.allowed.hsv
        h, s, v = (float(x) for x in c3)
        s_times_v_all = colors[:, 1] * colors[:, 2]
        s_times_v = s * v
        delta_x = 50.0 * (np.cos(colors[:, 0]) * s_times_v_all - s_times_v * math.cos(h))
        delta_y = 50.0 * (np.sin(colors[:, 0]) * s_times_v_all - s_times_v * math.sin(h))
        delta_z = 86.60254 * (colors[:, 2] - v)
        return delta_x**2 + delta_y**2 + delta_z**2

    def _dist_lab94(self, c3: np.ndarray) -> np.ndarray:
        colors = self.allowed.lab
        l, a, b = (float(x) for x in c3)
        delta_l_2 = (colors[:, 0] - l) ** 2
        c1 = math.sqrt(a * a + b * b)
        c2_2 = colors[:, 1] ** 2 + colors[:, 2] ** 2
        c2 = np.sqrt(c2_2)
        delta_cab_2 = (c1 - c2) ** 2
        delta_hab_2 = (colors[:, 1] - a) ** 2 + (colors[:, 2] - b) ** 2 - delta_cab_2
        sc_2 = (c1 * 0.045 + 1.0) ** 2
        sh_2 = (c2 * 0.015 + 1.0) ** 2
        return delta_l_2 + delta_cab_2 / sc_2 + delta_hab_2 / sh_2

    def _dist_lab00(self, c3: np.ndarray) -> np.ndarray:
        l, a, b = (float(x) for x in c3)
        return np.array([lab00(l, a, b, *(float(x) for x in row)) for row in self.allowed.lab])