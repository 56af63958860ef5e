[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minievm"
version = "0.1.0"
description = "A minimal stack-machine interpreter for a subset of EVM bytecode"
requires-python = ">=3.10"
keywords = ["evm", "bytecode", "interpreter", "virtual machine", "stack machine"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minievm = "minievm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minievm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
