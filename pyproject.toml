[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "merkelrex"
version = "0.1.0"
description = "A command-line exchange simulator that replays a CSV order book, matches asks to bids and tracks a trading wallet"
requires-python = ">=3.10"
dependencies = []
keywords = ["exchange", "order book", "trading", "simulation", "merkle tree", "wallet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
merkelrex = "merkelrex.app:main"

[tool.hatch.build.targets.wheel]
packages = ["merkelrex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
