"""Selectable blocks grouped by their base colour."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from slopecraft.block import Block

__all__ = ["Language", "BlockEntry", "BaseColorGroup"]

_log = logging.getLogger(__name__)

_SELECTED_SCORE = 100
_AVAILABLE_SCORE = 51


class Language(enum.Enum):
    """Display language of block names."""

    ZH = 0
    EN = 1


@dataclass
class BlockEntry:
    """One block offered for a base colour, with its names and icon."""

    block: Block
    index: int
    name_zh: str
    name_en: str
    icon: Path | None = None
    enabled: bool = True

    @classmethod
    def from_json(cls, info: Mapping[str, Any], image_dir: str, index: int) -> BlockEntry:
        """Build an entry from a block description; ``index`` is its place in its group."""
        block = Block(
            id=str(info.get("id", "")),
            version=int(info.get("version", 0)),
            id_old=str(info.get("idOld", "")),
            need_glass=bool(info.get("needGlass", False)),
            do_glow=bool(info.get("isGlowing", False)),
            enderman_pickable=bool(info.get("endermanPickable", False)),
            burnable=bool(info.get("burnable", False)),
            wall_useable=bool(info.get("wallUseable", False)),
        )
        icon_path = Path(f"{image_dir}/{info.get('icon', '')}")
        icon: Path | None = icon_path
        if not icon_path.is_file():
            _log.warning("image %s for block %s is missing", icon_path, block.id)
            icon = None
        return cls(
            block=block,
            index=index,
            name_zh=str(info.get("nameZH", "")),
            name_en=str(info.get("nameEN", "")),
            icon=icon,
        )

    def display_name(self, language: Language) -> str:
        """Name of the block in ``language``."""
        return self.name_zh if language is Language.ZH else self.name_en


class BaseColorGroup:
    """The blocks of one base colour: which is chosen and whether the colour is used.

    The group behaves like a check box (``checked``) with a set of mutually
    exclusive radio choices (``checked_index``).  ``selected`` is the index of
    the block actually used, or None when the group has no blocks.
    """

    def __init__(
        self,
        base_color: int,
        mc_version: int = 17,
        on_click: Callable[[], None] | None = None,
    ) -> None:
        self.base_color = base_color
        self.mc_version = mc_version
        self.entries: list[BlockEntry] = []
        self.selected: int | None = None
        self.checked_index: int | None = None
        self.checkbox_enabled = base_color != 0
        self.checked = False
        self.is_enabled = True
        self._on_click: Callable[[], None] | None = None
        self.version_check()
        self._on_click = on_click

    def _notify(self) -> None:
        if self._on_click is not None:
            self._on_click()

    def _toggle(self, value: bool) -> None:
        if value == self.checked:
            return
        self.checked = value
        self.is_enabled = value
        self.version_check()
        self._notify()

    def add_block(self, info: Mapping[str, Any], image_dir: str) -> BlockEntry:
        """Append a block built from ``info``; the newest block becomes the checked choice."""
        entry = BlockEntry.from_json(info, image_dir, len(self.entries))
        self.entries.append(entry)
        self.checked_index = entry.index
        if entry.block.version > self.mc_version:
            entry.enabled = False
        return entry

    def set_version(self, version: int) -> None:
        """Change the target game version and re-evaluate availability."""
        self.mc_version = version
        self.version_check()

    def is_all_over_version(self) -> bool:
        """True if no block of the group exists in the target version."""
        return all(entry.block.version > self.mc_version for entry in self.entries)

    def version_check(self) -> None:
        """Re-evaluate which blocks can be chosen and pick the block in use."""
        self.checkbox_enabled = self.base_color != 0 and not self.is_all_over_version()
        if not self.checkbox_enabled:
            self._toggle(self.base_color == 0)
        self.is_enabled = self.checked

        if not self.entries:
            self.selected = None
            return
        if len(self.entries) == 1:
            self.selected = 0
            self.checked_index = 0
            self.entries[0].enabled = False
            return

        scores = []
        for idx, entry in enumerate(self.entries):
            if entry.block.version <= self.mc_version:
                scores.append(_SELECTED_SCORE if self.checked_index == idx else _AVAILABLE_SCORE)
                entry.enabled = True
            else:
                scores.append(1 if idx == 0 else 0)
                entry.enabled = False

        best = 0
        for idx, score in enumerate(scores):
            if score > scores[best]:
                best = idx
        self.selected = best
        if self.checked_index != best:
            self.checked_index = best

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"block index {index} out of range for {len(self.entries)} blocks")

    def select(self, index: int) -> None:
        """Choose block ``index`` programmatically."""
        self._check_index(index)
        self.checked_index = index
        self.version_check()

    def click(self, index: int) -> None:
        """Choose block ``index`` as a user would, notifying the listener."""
        self._check_index(index)
        if not self.entries[index].enabled:
            raise ValueError(f"block {index} cannot be chosen")
        self.checked_index = index
        self.selected = index % len(self.entries)
        self.version_check()
        self._notify()

    def set_enabled(self, enabled: bool) -> None:
        """Turn the use of this base colour on or off."""
        self._toggle(bool(enabled))

    def selected_block(self) -> BlockEntry:
        """The entry currently in use."""
        if self.selected is None:
            raise IndexError("the group has no blocks")
        return self.entries[self.selected]