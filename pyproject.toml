[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isoengine"
version = "0.1.0"
description = "A small isometric tile game engine with an entity-component-system core"
requires-python = ">=3.10"
keywords = ["isometric", "game", "engine", "ecs", "tiles", "texture-atlas", "perlin"]
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
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
isoengine = "isoengine.game:main"

[tool.hatch.build.targets.wheel]
packages = ["isoengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
