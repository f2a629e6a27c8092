[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "britannia"
version = "0.1.0"
description = "Game-data loader, world builder and small engine toolkit for a classic isometric role-playing game"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game",
    "role-playing",
    "flex",
    "game-data",
    "state-machine",
    "mersenne-twister",
    "sprites",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
britannia = "britannia.game:main"

[tool.hatch.build.targets.wheel]
packages = ["britannia"]

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
