[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lbclmm"
version = "0.1.0"
description = "Fixed-point price math and liquidity distribution for liquidity-book (binned) concentrated-liquidity pools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "amm",
    "liquidity",
    "concentrated-liquidity",
    "fixed-point",
    "q64.64",
    "bins",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["lbclmm"]

[tool.hatch.build.targets.sdist]
include = ["lbclmm", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
