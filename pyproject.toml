[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "globalsfm"
version = "0.1.0"
description = "Building blocks for global structure-from-motion: poses, cameras, view graphs, two-view geometry, inlier scoring, track filtering and clustering."
requires-python = ">=3.10"
keywords = [
    "structure-from-motion",
    "sfm",
    "computer-vision",
    "view-graph",
    "epipolar-geometry",
    "photogrammetry",
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
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["globalsfm"]

[tool.pytest.ini_options]
addopts = "-ra"
