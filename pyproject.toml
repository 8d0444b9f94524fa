[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pggen"
version = "0.1.0"
description = "Building blocks for generating database access code from a PostgreSQL schema: include specs, name handling, type mapping and configuration."
requires-python = ">=3.11"
dependencies = []
keywords = ["postgresql", "code generation", "sql", "include specs", "identifiers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pggen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
