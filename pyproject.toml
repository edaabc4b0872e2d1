[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rcwssim"
version = "0.1.0"
description = "Servo-loop simulator for a two-axis electro-optical director, with UDP feedback telemetry"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulation",
    "servo",
    "motor",
    "pi-controller",
    "turret",
    "udp",
    "telemetry",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
test = ["pytest"]

[project.scripts]
rcwssim = "rcwssim.core:main"

[tool.hatch.build.targets.wheel]
packages = ["rcwssim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
