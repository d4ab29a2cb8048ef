[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hwtools"
version = "0.1.0"
description = "Small utilities: string unpacking, word frequency, LRU cache, parallel runner, pipelines, file copying, envdir, TCP client, dataclass validation and e-mail domain statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["lru", "envdir", "telnet", "pipeline", "validation", "copy", "ntp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
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
hwtools-now = "hwtools.timecheck:main"
hwtools-copy = "hwtools.filecopy:main"
hwtools-envdir = "hwtools.envdir:main"
hwtools-telnet = "hwtools.telnet:main"

[tool.hatch.build.targets.wheel]
packages = ["hwtools"]

[tool.pytest.ini_options]
addopts = "-ra"
