"""Block descriptions used to build map art."""

from __future__ import annotations

from dataclasses import dataclass, fields

__all__ = ["Block", "library_version"]

_LIBRARY_VERSION = "v3.6.1"
AIR_ID = "minecraft:air"


@dataclass
class Block:
    """A block that can stand in for one base colour.

    ``version`` is the first game version (12 for 1.12, 13 for 1.13, ...)
    in which the block exists; ``id_old`` is its id in 1.12.
    """

    id: str = AIR_ID
    version: int = 0
    id_old: str = ""
    need_glass: bool = False
    do_glow: bool = False
    enderman_pickable: bool = False
    burnable: bool = False
    wall_useable: bool = False

    def copy_to(self, other: Block) -> None:
        """Make ``other`` equal to this block."""
        for field in fields(self):
            setattr(other, field.name, getattr(self, field.name))

    def clear(self) -> None:
        """Reset this block to air."""
        self.id = AIR_ID
        self.version = 0
        self.id_old = ""
        self.need_glass = False
        self.do_glow = False
        self.enderman_pickable = False
        self.burnable = False
        self.wall_useable = False


def library_version() -> str:
    """Version string of the conversion library."""
    return _LIBRARY_VERSION