[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keyids"
version = "0.1.0"
description = "Thread-safe allocator that maps string keys to small integer ids with a cool-off before ids are reused"
requires-python = ">=3.10"
dependencies = []
keywords = ["id", "allocator", "bitmap", "hash table", "identifier"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["keyids"]

[tool.pytest.ini_options]
addopts = "-ra"
