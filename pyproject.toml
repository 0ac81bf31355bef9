[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hplbench"
version = "0.1.0"
description = "Linpack-style dense LU benchmark: input-file parsing, timed solves, residual checks and reports"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["linpack", "hpl", "benchmark", "linear-algebra", "lu"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hplbench = "hplbench.driver:main"

[tool.hatch.build.targets.wheel]
packages = ["hplbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
