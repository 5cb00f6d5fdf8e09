[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vircon"
version = "0.1.0"
description = "Sound unit, clock and recording video output of a 32-bit fantasy console"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "fantasy-console", "spu", "audio", "timer", "video"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vircon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
