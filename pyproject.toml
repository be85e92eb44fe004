[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "percam"
version = "0.1.0"
description = "Camera models, projections, model conversion and photometric features for perspective and omnidirectional vision"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "camera model",
    "omnidirectional",
    "fisheye",
    "projection",
    "calibration",
    "distortion",
    "photometric",
    "gaussian mixture",
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

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
percam = "percam.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["percam"]

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
ignore_missing_imports = true
