"""The full list of selectable blocks, one group per base colour."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from slopecraft.block import Block
from slopecraft.blockgroup import BaseColorGroup

__all__ = ["BlockListManager", "is_valid_block_info", "BASE_COLOR_NAMES", "SLOT_COUNT"]

_log = logging.getLogger(__name__)

SLOT_COUNT = 64
_MIN_VERSION = 12
_MAX_VERSION = 17

BASE_COLOR_NAMES: tuple[str, ...] = (
    "00 None", "01 Grass", "02 Sand", "03 Wool", "04 Fire", "05 Ice",
    "06 Metal", "07 Plant", "08 Snow", "09 Clay", "10 Dirt", "11 Stone",
    "12 Water", "13 Wood", "14 Quartz", "15 ColorOrange", "16 ColorMagenta",
    "17 ColorLightBlue", "18 ColorYellow", "19 ColorLime", "20 ColorPink",
    "21 ColorGray", "22 ColorLightGray", "23 ColorCyan", "24 ColorPurple",
    "25 ColorBlue", "26 ColorBrown", "27 ColorGreen", "28 ColorRed",
    "29 ColorBlack", "30 Gold", "31 Diamond", "32 Lapis", "33 Emerald",
    "34 Podzol", "35 Nether", "36 TerracottaWhite", "37 TerracottaOrange",
    "38 TerracottaMagenta", "39 TerracottaLightBlue", "40 TerracottaYellow",
    "41 TerracottaLime", "42 TerracottaPink", "43 TerracottaGray",
    "44 TerracottaLightGray", "45 TerracottaCyan", "46 TerracottaPurple",
    "47 TerracottaBlue", "48 TerracottaBrown", "49 TerracottaGreen",
    "50 TerracottaRed", "51 TerracottaBlack", "52 CrimsonNylium",
    "53 CrimsonStem", "54 CrimsonHyphae", "55 WarpedNylium", "56 WarpedStem",
    "57 WarpedHyphae", "58 WarpedWartBlock", "59 Deepslate", "60 RawIron",
    "61 GlowLichen",
)

_REQUIRED_KEYS = ("id", "nameZH", "nameEN", "baseColor")
_DEFAULTS: tuple[tuple[str, Any], ...] = (
    ("version", 0),
    ("needGlass", False),
    ("isGlowing", False),
    ("icon", ""),
    ("endermanPickable", False),
    ("burnable", False),
    ("wallUseable", True),
)


def is_valid_block_info(info: Mapping[str, Any]) -> bool:
    """True if a block description carries every required key."""
    return all(key in info for key in _REQUIRED_KEYS)


class BlockListManager:
    """Holds a :class:`BaseColorGroup` for every named base colour.

    ``on_change`` is called whenever the chosen blocks change;
    ``on_switch_to_custom`` when the user, rather than a preset, changed them.
    """

    def __init__(
        self,
        on_change: Callable[[], None] | None = None,
        on_switch_to_custom: Callable[[], None] | None = None,
    ) -> None:
        self.on_change = on_change
        self.on_switch_to_custom = on_switch_to_custom
        self.mc_version = _MAX_VERSION
        self._applying_preset = False
        self.groups: list[BaseColorGroup] = [
            BaseColorGroup(base_color, self.mc_version, self._receive_clicked)
            for base_color in range(len(BASE_COLOR_NAMES))
        ]

    @contextmanager
    def _applying(self) -> Iterator[None]:
        previous = self._applying_preset
        self._applying_preset = True
        try:
            yield
        finally:
            self._applying_preset = previous

    def _receive_clicked(self) -> None:
        if self._applying_preset:
            return
        if self.on_switch_to_custom is not None:
            self.on_switch_to_custom()
        if self.on_change is not None:
            self.on_change()

    def add_blocks(self, infos: Iterable[Mapping[str, Any]], image_dir: str) -> None:
        """Add block descriptions; invalid ones are skipped with a warning.

        Raises ValueError for a base colour that has no group.
        """
        image_dir = image_dir.replace("\\", "/")
        tasks: list[list[dict[str, Any]]] = [[] for _ in self.groups]
        for raw in infos:
            if not is_valid_block_info(raw):
                _log.warning("invalid block description: %r", raw)
                continue
            info = dict(raw)
            for key, value in _DEFAULTS:
                info.setdefault(key, value)
            info.setdefault("idOld", info["id"])
            base_color = int(info["baseColor"])
            if not 0 <= base_color < len(self.groups):
                raise ValueError(f"base colour {base_color} out of range")
            tasks[base_color].append(info)

        with self._applying():
            for group, queue in zip(self.groups, tasks):
                for info in queue:
                    group.add_block(info, image_dir)
                if queue:
                    group.version_check()

    def apply_preset(self, preset: Sequence[int | None]) -> None:
        """Choose a block for every group and enable all of them."""
        if len(preset) < len(self.groups):
            raise ValueError(f"preset needs {len(self.groups)} entries, got {len(preset)}")
        with self._applying():
            for group, index in zip(self.groups, preset):
                if index is not None and group.entries:
                    group.select(index)
                group.set_enabled(True)
        if self.on_change is not None:
            self.on_change()

    def set_selected(self, base_color: int, index: int) -> None:
        """Choose block ``index`` of a base colour without notifying."""
        with self._applying():
            self.groups[base_color].select(index)

    def set_enabled(self, base_color: int, enabled: bool) -> None:
        """Turn a base colour on or off without notifying."""
        with self._applying():
            self.groups[base_color].set_enabled(enabled)

    def set_version(self, version: int) -> None:
        """Change the target game version; versions outside 12..17 are ignored."""
        if version < _MIN_VERSION or version > _MAX_VERSION:
            return
        self.mc_version = version
        for group in self.groups:
            group.set_version(version)

    def enable_list(self) -> list[bool]:
        """Whether each base colour is in use."""
        return [group.is_enabled for group in self.groups]

    def block_list(self) -> list[Block | None]:
        """The block in use for each of the 64 slots, None where there is none."""
        blocks: list[Block | None] = [None] * SLOT_COUNT
        for i, group in enumerate(self.groups):
            if group.selected is not None:
                blocks[i] = group.selected_block().block
        return blocks

    def to_preset(self) -> list[int | None]:
        """The chosen index of each of the 64 slots: 0 past the groups, None for empty groups."""
        preset: list[int | None] = [0] * SLOT_COUNT
        for i, group in enumerate(self.groups):
            preset[i] = group.selected
        return preset

    def block_count(self) -> int:
        """Number of blocks in all groups."""
        return sum(len(group.entries) for group in self.groups)

    def all_blocks(self) -> list[tuple[int, Block]]:
        """Every block with its base colour, group by group."""
        return [
            (group.base_color, entry.block)
            for group in self.groups
            for entry in group.entries
        ]