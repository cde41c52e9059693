[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keypaddle"
version = "1.0.0"
description = "Macro encoding, decoding, storage and a command console for a programmable key paddle"
requires-python = ">=3.10"
dependencies = []
keywords = ["macro", "keyboard", "key paddle", "eeprom", "debounce"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
keypaddle = "keypaddle.console:main"

[tool.hatch.build.targets.wheel]
packages = ["keypaddle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
