[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "quadkit"
version = "0.3.25"
description = "Immediate-mode UI building blocks and a Tiled map loader: layout cursor, input state, draw commands, mesh batching and styles"
requires-python = ">=3.10"
dependencies = []
keywords = ["ui", "immediate-mode", "gui", "tiled", "tilemap", "layout", "mesh"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["quadkit*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
