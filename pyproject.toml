[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mycrib"
version = "0.1.0"
description = "A small HTTPS JSON API for searching a SQLite movie catalogue"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "https", "json", "api", "sqlite", "movies"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mycrib = "mycrib.server:main"

[tool.hatch.build.targets.wheel]
packages = ["mycrib"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
