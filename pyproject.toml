[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubeboot"
version = "0.1.0"
description = "Boot-loader building blocks: DOL loading, inflate/gzip/zlib, printf formatting, colour and texture tools, 64-bit integer maths"
requires-python = ">=3.10"
dependencies = []
keywords = ["dol", "bootloader", "inflate", "gzip", "zlib", "printf", "texture", "rgba8"]
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
    "Topic :: System :: Boot",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["cubeboot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
