[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "miden-node"
version = "0.1.0"
description = "Domain types, message conversions, configuration, request validation and transaction batching for a rollup node"
requires-python = ">=3.11"
dependencies = []
keywords = [
    "rollup",
    "node",
    "digest",
    "merkle",
    "sparse-merkle-tree",
    "transaction-queue",
    "configuration",
    "asyncio",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["miden_node"]

[tool.hatch.build.targets.sdist]
include = [
    "miden_node",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
