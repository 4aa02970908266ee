[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solitable"
version = "0.1.0"
description = "Core pieces of a solitaire engine: open-addressing hash table, byte builder, game clock, card entities, texture formats and a diff-based undo system"
requires-python = ">=3.10"
dependencies = []
keywords = ["solitaire", "cards", "undo", "hash-table", "game-engine"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["solitable"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
