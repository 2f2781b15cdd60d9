[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "x68gfx"
version = "0.1.0"
description = "Palette, clipping, colour reduction and image buffer helpers for X68000-style 512x512 graphics planes"
requires-python = ">=3.10"
dependencies = []
keywords = ["x68000", "graphics", "palette", "median-cut", "sprites", "vram", "clipping"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["x68gfx"]

[tool.pytest.ini_options]
addopts = "-ra"
