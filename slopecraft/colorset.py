"""The 256-entry map colour palette and its allowed subset."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from slopecraft.colorspace import argb32, get_a, get_b, get_g, get_r

__all__ = ["ColorSet", "base_map", "compose_color"]

PALETTE_SIZE = 256


def base_map() -> np.ndarray:
    """Map colour of each palette row: row r holds depth r//64 of base colour r%64."""
    rows = np.arange(PALETTE_SIZE)
    return (4 * (rows % 64) + rows // 64).astype(np.uint8)


class ColorSet:
    """Palette colours in four colour spaces, with their map colour ids."""

    def __init__(self) -> None:
        self.map = base_map()
        self.rgb = np.zeros((PALETTE_SIZE, 3))
        self.hsv = np.zeros((PALETTE_SIZE, 3))
        self.lab = np.zeros((PALETTE_SIZE, 3))
        self.xyz = np.zeros((PALETTE_SIZE, 3))
        self.depth_count: tuple[int, int, int, int] = (64, 64, 64, 64)

    def apply_allowed(self, standard: ColorSet, allowed: Sequence[bool]) -> None:
        """Keep only the rows of ``standard`` flagged in ``allowed``.

        Raises ValueError if ``allowed`` does not have 256 entries or if at
        most one colour is allowed; in the latter case the set is left with a
        single zero row.
        """
        mask = np.asarray(allowed, dtype=bool)
        if mask.shape != (PALETTE_SIZE,):
            raise ValueError(f"allowed must have {PALETTE_SIZE} entries, got {mask.size}")

        depths = np.arange(PALETTE_SIZE) // 64
        self.depth_count = tuple(int(np.count_nonzero(mask & (depths == d))) for d in range(4))
        total = int(np.count_nonzero(mask))

        if total <= 1:
            self.rgb = np.zeros((1, 3))
            self.hsv = np.zeros((1, 3))
            self.lab = np.zeros((1, 3))
            self.xyz = np.zeros((1, 3))
            self.map = np.zeros(1, dtype=np.uint8)
            raise ValueError("too few colors allowed")

        self.rgb = standard.rgb[mask].copy()
        self.hsv = standard.hsv[mask].copy()
        self.lab = standard.lab[mask].copy()
        self.xyz = standard.xyz[mask].copy()
        self.map = standard.map[mask].copy()

    def color_count(self) -> int:
        """Number of colours in the set."""
        return int(self.rgb.shape[0])


def compose_color(front: int, back: int) -> int:
    """Alpha-blend ``front`` over ``back``, returning an opaque ARGB value."""
    alpha = get_a(front)
    red = (get_r(front) * alpha + get_r(back) * (255 - alpha)) // 255
    green = (get_g(front) * alpha + get_g(back) * (255 - alpha)) // 255
    blue = (get_b(front) * alpha + get_b(back) * (255 - alpha)) // 255
    return argb32(red, green, blue)