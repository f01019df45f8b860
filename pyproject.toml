[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sc2kit"
version = "0.1.0"
description = "Geometry, image grids and unit bookkeeping helpers for real-time strategy game bots"
requires-python = ">=3.10"
dependencies = []
keywords = ["rts", "bot", "game-ai", "geometry", "units"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sc2kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
