[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuzzcore"
version = "0.1.0"
description = "Building blocks of a coverage-guided fuzzer: corpus scheduling, mutation dictionaries, value bitmaps and data-flow trace reporting."
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzing", "fuzzer", "corpus", "coverage", "entropic", "testing"]
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
    "Topic :: Software Development :: Testing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fuzzcore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
