[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arborgen"
version = "0.1.0"
description = "Procedural 3D tree generator with a random walk through its parameter space"
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = ["procedural", "tree", "generation", "3d", "random-walk", "matplotlib"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
arborgen = "arborgen.app:main"

[tool.hatch.build.targets.wheel]
packages = ["arborgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
