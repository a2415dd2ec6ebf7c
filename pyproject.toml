[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshforge"
version = "0.1.0"
description = "Procedural mesh building, primitive generation, OBJ loading and scene transforms"
requires-python = ">=3.10"
keywords = ["mesh", "3d", "obj", "geometry", "icosphere", "uv-sphere", "transform", "quaternion"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]
dependencies = [
    "numpy",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["meshforge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
