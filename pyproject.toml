[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "partnest"
version = "0.1.0"
description = "Genetic-algorithm search over placement orders and rotations of polygonal parts, with convex no-fit polygons and a background job worker"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "nesting",
    "genetic algorithm",
    "minkowski sum",
    "no-fit polygon",
    "cutting",
]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["partnest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
