[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simplefs"
version = "0.1.0"
description = "A tiny single-file simulated filesystem with an interactive menu shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "disk image", "simulation", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
simplefs = "simplefs.cli:main"
simplefs-format-disk = "simplefs.format_disk:main"

[tool.hatch.build.targets.wheel]
packages = ["simplefs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
