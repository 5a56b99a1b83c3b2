[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "densfn"
version = "0.1.0"
description = "Set up periodic point sets from crystal data and prepare, combine and plot their density functions"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "crystallography",
    "periodic sets",
    "density functions",
    "lattice",
    "CIF",
    "gnuplot",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["densfn"]

[tool.hatch.build.targets.sdist]
include = ["densfn", "tests"]

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
