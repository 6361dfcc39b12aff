"""Lossless height compression of one column of a 3D map."""

from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass

import numpy as np

__all__ = ["RegionType", "Region", "OptiChain"]

_log = logging.getLogger(__name__)

NEG_INF = -100000
_AIR = 0
_WATER = 12


class RegionType(enum.Enum):
    """Kind of a stretch of a column."""

    IDP = 0
    HANG = 1
    INVALID = 2


@dataclass
class Region:
    """An inclusive stretch ``beg..end`` of a column."""

    beg: int = -1
    end: int = -1
    type: RegionType = RegionType.INVALID

    def is_idp(self) -> bool:
        """True for an independent region that can sink freely."""
        return self.type is RegionType.IDP

    def is_hang(self) -> bool:
        """True for a hanging (local maximum) region."""
        return self.type is RegionType.HANG

    def is_valid(self) -> bool:
        """True if the region has a type and holds at least one index."""
        return self.type is not RegionType.INVALID and self.size() >= 1

    def size(self) -> int:
        """Number of indices in the region."""
        return self.end - self.beg + 1

    def local_to_global(self, index: int) -> int:
        """Column index of the region's ``index``-th element."""
        return index + self.beg

    def global_to_local(self, index: int) -> int:
        """Position inside the region of column index ``index``."""
        return index - self.beg

    def __str__(self) -> str:
        if not self.is_valid():
            return f"{{{self.beg},{self.end}}}"
        if self.is_hang():
            return f"[{self.beg},{self.end}]"
        return f"({self.beg},{self.end})"


class OptiChain:
    """Sinks the parts of a column as far as they go without changing the map.

    ``base`` holds the base colour of each position (0 is air, 12 is water);
    ``high`` and ``low`` the top and bottom height of each position.
    """

    def __init__(self, base, high, low) -> None:
        self._base = np.asarray(base, dtype=np.int64).copy()
        self._high = np.asarray(high, dtype=np.int64).copy()
        self._low = np.asarray(low, dtype=np.int64).copy()
        if self._base.ndim != 1:
            raise ValueError("base must be one-dimensional")
        if self._high.shape != self._base.shape or self._low.shape != self._base.shape:
            raise ValueError("base, high and low must have the same length")
        self._sub_chain: list[Region] = []

    @property
    def _size(self) -> int:
        return int(self._base.shape[0])

    def high_line(self) -> np.ndarray:
        """Top height of each position."""
        return self._high.copy()

    def low_line(self) -> np.ndarray:
        """Bottom height of each position."""
        return self._low.copy()

    def _in_range(self, index: int) -> bool:
        return 0 <= index < self._size

    def _is_air(self, index: int) -> bool:
        return not self._in_range(index) or self._base[index] == _AIR

    def _is_water(self, index: int) -> bool:
        return self._in_range(index) and self._base[index] == _WATER

    def _is_solid(self, index: int) -> bool:
        return self._in_range(index) and self._base[index] not in (_AIR, _WATER)

    def _valid_height(self, index: int) -> int:
        if not self._in_range(index) or self._is_air(index):
            return NEG_INF
        return int(self._high[index])

    def divide_and_compress(self) -> None:
        """Compress the column in place."""
        chain = self._divide_to_chain()
        while chain:
            current = chain.popleft()
            if current.is_valid():
                self._sub_chain = self._divide_to_sub_chain(current)
            for region in self._sub_chain:
                if region.is_idp():
                    self._sink(region)
            for region in self._sub_chain:
                if region.is_hang():
                    self._sink(region)

    def _divide_to_chain(self) -> deque[Region]:
        """Split the column at every air and water position."""
        chain: deque[Region] = deque()
        beg = 0
        for i in range(1, self._size):
            if self._is_air(i) or self._is_water(i):
                chain.append(Region(beg, i - 1, RegionType.IDP))
                beg = i
        chain.append(Region(beg, self._size - 1, RegionType.IDP))
        return chain

    def _divide_to_sub_chain(self, cur: Region) -> list[Region]:
        """Split an isolated region into hanging maxima and free stretches."""
        if cur.size() <= 3:
            return [Region(cur.beg, cur.end, RegionType.IDP)]

        n = cur.size()
        heights = [int(v) for v in self._high[cur.beg : cur.end + 1]] + [NEG_INF]
        left = [False] * n
        right = [False] * n
        for i in range(1, n):
            prev_h, here, next_h = heights[i - 1 : i + 2]
            if 2 * here - prev_h - next_h > 0:
                left[i] = here - prev_h > 0
                right[i] = here - next_h > 0

        hangs: list[Region] = []
        start: int | None = None
        for i in range(n):
            if start is None and left[i]:
                start = cur.local_to_global(i)
            if start is not None and right[i]:
                hangs.append(Region(start, cur.local_to_global(i), RegionType.HANG))
                start = None

        result: list[Region] = []
        gap_beg = cur.local_to_global(0)
        for hang in hangs:
            gap = Region(gap_beg, hang.beg - 1, RegionType.IDP)
            if gap.is_valid():
                result.append(gap)
            result.append(hang)
            gap_beg = hang.end + 1

        if not result:
            result.append(Region(cur.beg, cur.end, cur.type))
        elif result[-1].end < cur.end:
            result.append(Region(result[-1].end + 1, cur.end, RegionType.IDP))
        return result

    def _sink(self, region: Region) -> None:
        if not region.is_valid():
            _log.warning("invalid region: %s", region)
            return
        seg = slice(region.beg, region.end + 1)
        low_min = int(self._low[seg].min())
        if region.is_idp():
            self._high[seg] -= low_min
            self._low[seg] -= low_min
            return
        if region.is_hang():
            beg_gap = self._valid_height(region.beg) - self._valid_height(region.beg - 1)
            if self._is_solid(region.end + 1):
                end_gap = self._valid_height(region.end) - self._valid_height(region.end + 1)
            else:
                end_gap = self._valid_height(region.end) - NEG_INF
            offset = min(max(min(beg_gap, end_gap) - 1, 0), low_min)
            self._high[seg] -= offset
            self._low[seg] -= offset