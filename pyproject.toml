[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ndlinalg"
version = "0.1.0"
description = "Linear algebra on NumPy arrays: LU and Bunch-Kaufman solvers, determinants, condition numbers, triangular and tridiagonal systems, and SVD"
requires-python = ">=3.10"
keywords = [
    "linear algebra",
    "lu",
    "bunch-kaufman",
    "determinant",
    "condition number",
    "triangular",
    "tridiagonal",
    "svd",
    "numpy",
    "lapack",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
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
packages = ["ndlinalg"]

[tool.hatch.build.targets.sdist]
include = ["ndlinalg", "tests", "README.md"]

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
