[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacesim"
version = "0.1.0"
description = "Space simulation building blocks: cargo holds, shipyard production, ship combat and procedural terrain"
requires-python = ">=3.10"
keywords = ["space", "simulation", "game", "terrain", "procedural", "combat", "noise"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
spacesim-resources = "spacesim.resources_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["spacesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
