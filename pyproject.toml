[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crossgrid"
version = "0.1.0"
description = "Crossword grid generator that fills a grid from a word list by backtracking search"
requires-python = ">=3.10"
dependencies = []
keywords = ["crossword", "puzzle", "grid", "generator", "backtracking", "mersenne-twister"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
crossgrid = "crossgrid.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["crossgrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
