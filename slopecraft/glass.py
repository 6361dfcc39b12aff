"""Glass bridges that connect the blocks of a map layer, built with Prim's algorithm."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from slopecraft.colorspace import argb32

__all__ = [
    "BlockType",
    "PairedEdge",
    "PrimGlassBuilder",
    "connect_between_layers",
    "tokimap_to_image",
    "y_slice_to_tokimap",
    "UNIT_LENGTH",
    "AIR_COLOR",
    "TARGET_COLOR",
    "GLASS_COLOR",
]

UNIT_LENGTH = 32

AIR_COLOR = argb32(255, 255, 255)
TARGET_COLOR = argb32(0, 0, 0)
GLASS_COLOR = argb32(192, 192, 192)

_INF = np.iinfo(np.int64).max

Point = tuple[int, int]
ProgressCallback = Callable[[int, int, int], None]


class BlockType(enum.IntEnum):
    """Cell values of a glass map."""

    AIR = 0
    GLASS = 1
    TARGET = 127


@dataclass(frozen=True)
class PairedEdge:
    """A straight edge between two cells given as (row, col)."""

    first: Point = (0, 0)
    second: Point = (0, 0)
    length_square: int = field(init=False)

    def __post_init__(self) -> None:
        first = (int(self.first[0]), int(self.first[1]))
        second = (int(self.second[0]), int(self.second[1]))
        object.__setattr__(self, "first", first)
        object.__setattr__(self, "second", second)
        row_span = first[0] - second[0]
        col_span = first[1] - second[1]
        object.__setattr__(self, "length_square", row_span * row_span + col_span * col_span)

    def connects(self, point: Point) -> bool:
        """True if ``point`` is one of the two ends."""
        point = (int(point[0]), int(point[1]))
        return point == self.first or point == self.second

    def draw(self, grid: np.ndarray, draw_head: bool = False) -> None:
        """Draw glass along the edge into ``grid`` in place.

        Edges between neighbouring cells draw nothing.  The two ends are set
        to TARGET when ``draw_head`` is true, otherwise to AIR.
        """
        if self.length_square <= 2:
            return
        length = np.float32(math.sqrt(self.length_square))
        steps = math.ceil(2.0 * float(length))
        start = np.array(self.first, dtype=np.float32)
        end = np.array(self.second, dtype=np.float32)
        step = (end - start) / np.float32(steps)
        rows, cols = grid.shape
        for i in range(1, steps):
            cur = np.float32(i) * step + start
            r = math.floor(cur[0])
            c = math.floor(cur[1])
            if 0 <= r < rows and 0 <= c < cols:
                grid[r, c] = BlockType.GLASS
                continue
            r = math.ceil(cur[0])
            c = math.ceil(cur[1])
            if 0 <= r < rows and 0 <= c < cols:
                grid[r, c] = BlockType.GLASS
        head = BlockType.TARGET if draw_head else BlockType.AIR
        grid[self.first] = head
        grid[self.second] = head


def _as_tokimap(target_map) -> np.ndarray:
    tmap = np.asarray(target_map)
    if tmap.ndim != 2:
        raise ValueError("a target map must be two-dimensional")
    return tmap


def _target_points(tmap: np.ndarray) -> list[Point]:
    """Non-zero cells, leaving out inner cells whose four neighbours are all non-zero."""
    nz = tmap != 0
    rows, cols = tmap.shape
    interior = np.zeros_like(nz)
    if rows >= 4 and cols >= 4:
        rr = slice(2, rows - 1)
        cc = slice(2, cols - 1)
        interior[rr, cc] = (
            nz[rr, cc]
            & nz[3:rows, cc]
            & nz[1 : rows - 2, cc]
            & nz[rr, 3:cols]
            & nz[rr, 1 : cols - 2]
        )
    return [(int(r), int(c)) for r, c in np.argwhere(nz & ~interior)]


def _prim_tree(points: list[Point]) -> list[PairedEdge]:
    """Minimum spanning tree over squared distances.

    Ties go to the edge (i, j), i < j, that comes first in lexicographic order.
    """
    n = len(points)
    if n < 2:
        return []
    pts = np.array(points, dtype=np.int64)
    diff = pts[:, None, :] - pts[None, :, :]
    dist = (diff**2).sum(axis=2)
    idx = np.arange(n, dtype=np.int64)

    def composite(v: int) -> np.ndarray:
        return dist[v] * n * n + np.minimum(v, idx) * n + np.maximum(v, idx)

    found = np.zeros(n, dtype=bool)
    found[0] = True
    key = composite(0)
    tree: list[PairedEdge] = []
    for _ in range(n - 1):
        masked = np.where(found, _INF, key)
        u = int(np.argmin(masked))
        k = int(key[u])
        lo = (k // n) % n
        hi = k % n
        tree.append(PairedEdge(points[lo], points[hi]))
        found[u] = True
        key = np.minimum(key, composite(u))
    return tree


def _bridge_single(tmap: np.ndarray) -> tuple[np.ndarray, np.ndarray, list[Point]]:
    """Bridge one block of at most UNIT_LENGTH x UNIT_LENGTH cells."""
    points = _target_points(tmap)
    glass = np.zeros(tmap.shape, dtype=np.uint8)
    for edge in _prim_tree(points):
        edge.draw(glass)
    for point in points:
        glass[point] = BlockType.AIR
    walkable = glass.copy()
    for point in points:
        walkable[point] = BlockType.TARGET
    return glass, walkable, points


def _closest(distances: np.ndarray) -> int:
    """Index of the first distance of at most 2, else of the first minimum."""
    near = np.flatnonzero(distances <= 2)
    if near.size:
        return int(near[0])
    return int(np.argmin(distances))


def _connect_blocks(
    points1: list[Point], offset1: Point, points2: list[Point], offset2: Point
) -> PairedEdge:
    if not points1 or not points2:
        return PairedEdge()
    a = np.array(points1, dtype=np.int64) + np.array(offset1, dtype=np.int64)
    b = np.array(points2, dtype=np.int64) + np.array(offset2, dtype=np.int64)
    dist = ((a[:, None, :] - b[None, :, :]) ** 2).sum(axis=2)
    flat = _closest(dist.ravel())
    i, j = divmod(flat, b.shape[0])
    return PairedEdge(tuple(a[i]), tuple(b[j]))


class PrimGlassBuilder:
    """Builds glass bridges joining every target cell of a layer.

    ``progress`` is called as ``progress(low, high, value)`` while working.
    """

    def __init__(self, progress: ProgressCallback | None = None) -> None:
        self.progress = progress

    def _report(self, low: int, high: int, value: int) -> None:
        if self.progress is not None:
            self.progress(low, high, value)

    def make_bridge(self, target_map) -> tuple[np.ndarray, np.ndarray]:
        """Return the glass map and the walkable map of ``target_map``.

        The map is split into blocks of UNIT_LENGTH cells; each block is
        spanned by a minimum tree and neighbouring blocks are joined by
        their closest pair of target cells.  In the glass map target cells
        are AIR; in the walkable map they are TARGET.
        """
        tmap = _as_tokimap(target_map)
        rows, cols = tmap.shape
        row_count = math.ceil(rows / UNIT_LENGTH)
        col_count = math.ceil(cols / UNIT_LENGTH)

        blocks: dict[tuple[int, int], tuple[np.ndarray, np.ndarray, list[Point]]] = {}
        for r in range(row_count):
            for c in range(col_count):
                part = tmap[
                    UNIT_LENGTH * r : UNIT_LENGTH * (r + 1),
                    UNIT_LENGTH * c : UNIT_LENGTH * (c + 1),
                ]
                blocks[r, c] = _bridge_single(part)
            self._report(0, row_count, r)

        inter_edges: list[PairedEdge] = []
        for r in range(row_count):
            for c in range(col_count):
                here = blocks[r, c][2]
                offset = (UNIT_LENGTH * r, UNIT_LENGTH * c)
                if r + 1 < row_count:
                    edge = _connect_blocks(
                        here, offset, blocks[r + 1, c][2], (UNIT_LENGTH * (r + 1), UNIT_LENGTH * c)
                    )
                    if edge.length_square > 2:
                        inter_edges.append(edge)
                if c + 1 < col_count:
                    edge = _connect_blocks(
                        here, offset, blocks[r, c + 1][2], (UNIT_LENGTH * r, UNIT_LENGTH * (c + 1))
                    )
                    if edge.length_square > 2:
                        inter_edges.append(edge)

        result = np.zeros((rows, cols), dtype=np.uint8)
        walkable = np.zeros((rows, cols), dtype=np.uint8)
        for (r, c), (glass, walk, _) in blocks.items():
            h, w = glass.shape
            result[UNIT_LENGTH * r : UNIT_LENGTH * r + h, UNIT_LENGTH * c : UNIT_LENGTH * c + w] = glass
            walkable[UNIT_LENGTH * r : UNIT_LENGTH * r + h, UNIT_LENGTH * c : UNIT_LENGTH * c + w] = walk

        for edge in reversed(inter_edges):
            edge.draw(result)
            edge.draw(walkable, True)

        self._report(0, 100, 100)
        return result, walkable


def connect_between_layers(map1, map2) -> tuple[np.ndarray, np.ndarray]:
    """Join each target of ``map1`` to its nearest target of ``map2``.

    Returns the glass map and the walkable map, in which the targets of
    both layers are marked TARGET.
    """
    m1 = _as_tokimap(map1)
    m2 = _as_tokimap(map2)
    if m1.shape != m2.shape:
        raise ValueError("both layers must have the same shape")
    targets1 = [(int(r), int(c)) for r, c in np.argwhere(m1 >= BlockType.TARGET)]
    targets2 = [(int(r), int(c)) for r, c in np.argwhere(m2 >= BlockType.TARGET)]

    links: list[PairedEdge] = []
    if targets2:
        b = np.array(targets2, dtype=np.int64)
        for t1 in targets1:
            dist = ((b - np.array(t1, dtype=np.int64)) ** 2).sum(axis=1)
            links.append(PairedEdge(t1, targets2[_closest(dist)]))

    result = np.zeros(m1.shape, dtype=np.uint8)
    for edge in links:
        edge.draw(result)
    walkable = result.copy()
    for point in targets1 + targets2:
        result[point] = BlockType.AIR
        walkable[point] = BlockType.TARGET
    return result, walkable


def tokimap_to_image(tokimap) -> np.ndarray:
    """Render a map as ARGB: air white, glass grey, targets black."""
    tmap = _as_tokimap(tokimap)
    image = np.full(tmap.shape, AIR_COLOR, dtype=np.uint32)
    image[tmap == 1] = GLASS_COLOR
    image[tmap > 1] = TARGET_COLOR
    return image


def y_slice_to_tokimap(raw) -> np.ndarray:
    """Turn one horizontal slice (shape x, 1, z) of a structure into a target map."""
    arr = np.asarray(raw)
    if arr.ndim != 3 or arr.shape[1] != 1:
        raise ValueError("expected a slice of shape (x, 1, z)")
    return np.where(arr[:, 0, :] > 1, BlockType.TARGET, BlockType.AIR).astype(np.uint8)