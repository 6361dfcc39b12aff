# slopecraft

A library of the pieces needed to turn pictures into Minecraft map art: it
matches image colours against the map palette, compresses the height of a
column of blocks, joins floating blocks with glass bridges and writes NBT
files. It depends on numpy.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `slopecraft.colorspace`: ARGB packing and unpacking (`argb32`, `get_a`,
  `get_r`, `get_g`, `get_b`) and conversions between RGB, HSV, XYZ and CIELAB
  (`rgb_to_hsv`, `hsv_to_rgb`, `rgb_to_xyz`, `xyz_to_lab`, `lab_to_xyz`,
  `rgb_to_argb`, `hsv_to_argb`, `xyz_to_argb`, `lab_to_argb`).
- `slopecraft.ciede2000`: `lab00`, the squared CIEDE2000 difference between
  two Lab colours.
- `slopecraft.colorset`: `ColorSet`, the 256 map colours in RGB, HSV, Lab and
  XYZ with their map colour ids (`base_map`). `ColorSet.apply_allowed` keeps
  only the colours flagged in a 256-entry mask and raises `ValueError` when
  one colour or none is left. `compose_color` alpha-blends two ARGB values.
- `slopecraft.matcher`: `ColorMatcher` finds the closest allowed map colour
  of an ARGB pixel and returns a `MatchResult`; with `need_find_side` it also
  reports the best colours at the two other shadings. `to_color_space`
  converts a pixel into the space an algorithm compares in.
- `slopecraft.enums`: `GameVersion`, `ConvertAlgo`, `CompressSettings`,
  `GlassBridgeSettings`, `MapType`, `Step`, `ErrorFlag` and `WorkStatus`.
- `slopecraft.optichain`: `OptiChain` sinks the parts of one column of a
  staircase map as far as they go without changing the map;
  `Region` and `RegionType` describe the stretches it works on.
- `slopecraft.glass`: `PrimGlassBuilder.make_bridge` returns a glass map and
  a walkable map joining every target cell of a layer, built block by block
  with Prim's algorithm; `connect_between_layers`, `tokimap_to_image`,
  `y_slice_to_tokimap`, `PairedEdge` and `BlockType` go with it.
- `slopecraft.nbt`: `NBTWriter`, a streaming writer for uncompressed NBT
  files, usable as a context manager. Closing it with lists or compounds
  still open fills them with placeholder values unless
  `allow_emergency_fill` is turned off.
- `slopecraft.block`: `Block`, the description of one block, and
  `library_version`.
- `slopecraft.blockgroup`: `BlockEntry`, `BaseColorGroup` and `Language`,
  the blocks offered for one base colour and which of them is in use for a
  given game version.
- `slopecraft.blocklist`: `BlockListManager` holds a group for each base
  colour named in `BASE_COLOR_NAMES`, loads block descriptions (checked with
  `is_valid_block_info`), applies presets and reports the chosen blocks.

## Example

```python
from slopecraft.colorset import ColorSet
from slopecraft.colorspace import argb32
from slopecraft.matcher import ColorMatcher
from slopecraft.nbt import NBTWriter

palette = ColorSet()
print(palette.color_count())          # 256

allowed = ColorSet()
allowed.apply_allowed(palette, [i % 64 != 0 for i in range(256)])

matcher = ColorMatcher(allowed, "r")
print(matcher.match(argb32(200, 30, 30)).result)

with NBTWriter("example.nbt") as writer:
    writer.write_int("DataVersion", 2730)
    writer.write_string("Author", "someone")
```

A fresh `ColorSet` holds zeros in every colour space; the colour values are
filled in by the caller.

## What it does not do

There is no command and no graphical interface. The package does not read
image files, does not carry a palette's colour values, and has no driver
that runs a whole conversion: building the height map of a full picture,
assembling a 3D structure, and exporting litematica, structure or map data
files are left to the caller. `NBTWriter` writes uncompressed files only.
The values in `slopecraft.enums` name the settings and stages of such a
conversion, but nothing in the package drives them.