[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cachebench"
version = "0.1.0"
description = "Hit-rate and throughput benchmark of cache eviction policies under a Zipf workload"
requires-python = ">=3.10"
keywords = ["cache", "benchmark", "lru", "lfu", "sieve", "clock", "zipf", "eviction"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]
dependencies = [
    "tabulate",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cachebench = "cachebench.runner:main"

[tool.hatch.build.targets.wheel]
packages = ["cachebench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
