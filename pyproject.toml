[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assistantkit"
version = "0.1.0"
description = "Dependency-free client for an Assistants-style HTTP API: threads, messages, vector stores, models, moderation and speech"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "assistants",
    "api-client",
    "server-sent-events",
    "vector-store",
    "moderation",
    "rate-limit",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["assistantkit"]

[tool.hatch.build.targets.sdist]
include = ["assistantkit", "tests", "pyproject.toml", "README.md"]

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
warn_redundant_casts = true
