[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "muonhits"
version = "0.1.0"
description = "Decode muon detector hit files into bar-level event trees and draw hit heatmaps"
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = ["muon", "detector", "scintillator", "hits", "histogram", "heatmap", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
muonhits-process = "muonhits.single_plane:main"
muonhits-heatmap = "muonhits.histogram:main"
muonhits-multiplane = "muonhits.multiplane:main"

[tool.hatch.build.targets.wheel]
packages = ["muonhits"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
