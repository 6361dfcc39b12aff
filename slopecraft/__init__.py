"""Building blocks for Minecraft map art: colour matching, height compression, glass bridges and NBT writing."""

__version__ = "3.6.1"