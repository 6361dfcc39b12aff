"""Settings, steps, error flags and work states of the map-art kernel."""

from __future__ import annotations

import enum

__all__ = [
    "GameVersion",
    "ConvertAlgo",
    "CompressSettings",
    "GlassBridgeSettings",
    "MapType",
    "Step",
    "ErrorFlag",
    "WorkStatus",
]


class GameVersion(enum.IntEnum):
    """Target game version."""

    ANCIENT = 0
    MC12 = 12
    MC13 = 13
    MC14 = 14
    MC15 = 15
    MC16 = 16
    MC17 = 17
    FUTURE = 255


class ConvertAlgo(str, enum.Enum):
    """Colour difference formula used to match colours."""

    RGB = "r"
    RGB_BETTER = "R"
    HSV = "H"
    LAB94 = "l"
    LAB00 = "L"
    XYZ = "X"
    AI_CVTER = "A"


class CompressSettings(enum.IntEnum):
    """How the height of a 3D map is compressed."""

    NO_COMPRESS = 0
    NATURAL_ONLY = 1
    FORCED_ONLY = 2
    BOTH = 3


class GlassBridgeSettings(enum.IntEnum):
    """Whether glass bridges are built."""

    NO_BRIDGE = 0
    WITH_BRIDGE = 1


class MapType(enum.IntEnum):
    """Kind of map produced."""

    SLOPE = 0
    FLAT = 1
    FILE_ONLY = 2
    WALL = 3


class Step(enum.IntEnum):
    """Progress of a conversion, in the order the steps must be taken."""

    NOTHING = 0
    COLOR_SET_READY = 1
    WAIT_FOR_IMAGE = 2
    CONVERSION_READY = 3
    CONVERTED = 4
    BUILT = 5


class ErrorFlag(enum.IntEnum):
    """Errors reported by the kernel."""

    NO_ERROR_OCCUR = -1
    HASTY_MANIPULATION = 0x00
    LOSSYCOMPRESS_FAILED = 0x01
    DEPTH_3_IN_VANILLA_MAP = 0x02
    MAX_ALLOWED_HEIGHT_LESS_THAN_14 = 0x03
    USEABLE_COLOR_TOO_FEW = 0x04
    EMPTY_RAW_IMAGE = 0x05
    FAILED_TO_COMPRESS = 0x06
    FAILED_TO_REMOVE = 0x07
    PARSING_COLORMAP_RGB_FAILED = 0x10
    PARSING_COLORMAP_HSV_FAILED = 0x11
    PARSING_COLORMAP_LAB_FAILED = 0x12
    PARSING_COLORMAP_XYZ_FAILED = 0x13


class WorkStatus(enum.IntEnum):
    """What the kernel is busy with."""

    NONE = -1
    COLLECTING_COLORS = 0x00
    CONVERTING = 0x01
    DITHERING = 0x02
    BUILDING_HEIGHT_MAP = 0x10
    COMPRESSING = 0x11
    BUILDING_3D = 0x12
    CONSTRUCTING_BRIDGES = 0x13
    FLIPPING_TO_WALL = 0x14
    WRITING_META_INFO = 0x20
    WRITING_BLOCK_PALETTE = 0x21
    WRITING_3D = 0x22
    WRITING_MAP_DATA_FILES = 0x30