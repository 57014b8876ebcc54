[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "camgeom"
version = "0.1.0"
description = "Camera-calibration geometry helpers: colormaps, line and circle rasterisation, UTM conversion, quaternion updates, rigid transforms and chessboard quad-group corner extraction."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "camera calibration",
    "chessboard",
    "corner detection",
    "quaternion",
    "UTM",
    "geometry",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["camgeom"]

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
warn_unused_ignores = true
ignore_missing_imports = true
