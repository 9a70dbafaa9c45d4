[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "immolog"
version = "0.1.0"
description = "Codec for bit-packed telematics box log events: big-endian byte and bit buffers and event records"
requires-python = ">=3.10"
dependencies = []
keywords = ["telematics", "tbox", "binary", "codec", "bitfield", "vehicle"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["immolog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
