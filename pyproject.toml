[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ijvm"
version = "0.1.0"
description = "An interpreter for IJVM binaries: loads .ijvm files and executes their bytecode"
requires-python = ">=3.10"
dependencies = []
keywords = ["ijvm", "interpreter", "bytecode", "virtual machine", "emulator"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ijvm = "ijvm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ijvm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
