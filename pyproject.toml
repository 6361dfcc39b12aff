[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slopecraft"
version = "3.6.1"
description = "Building blocks for Minecraft map art: palette matching, column height compression, glass bridges and NBT writing"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["minecraft", "map art", "color matching", "ciede2000", "nbt", "prim"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["slopecraft"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
