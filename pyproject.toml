[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxtree"
version = "0.1.0"
description = "Sparse three-level voxel trees with cached accessors for volumetric data."
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "sparse", "volume", "vdb", "grid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxtree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
