[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lamsketch"
version = "0.1.0"
description = "Turn raw laminate cross-section sketches into ordered layers of plies with linked nodes"
requires-python = ">=3.10"
dependencies = []
keywords = ["laminate", "composite", "sketch", "geometry", "polyline", "plies"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lamsketch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
