[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "noxthings"
version = "0.1.0"
description = "Reader for decrypted Nox thing.bin data: images, spells, walls and thing definitions"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["nox", "game data", "thing.bin", "spells", "binary format"]
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
    "Topic :: File Formats",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["noxthings"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
