[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "acse"
version = "2.0.2"
description = "Intermediate program representation and code generation helpers for a small RISC-V teaching compiler"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "risc-v", "intermediate-representation", "code-generation", "education"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["acse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
