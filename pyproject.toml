[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linedispatch"
version = "0.1.0"
description = "A parent process that hands random lines of a text to a pool of child processes, driven by a loop-numbered command script."
requires-python = ">=3.10"
dependencies = []
keywords = ["processes", "multiprocessing", "ipc", "dispatch", "workers", "semaphores"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
linedispatch = "linedispatch.parent:main"

[tool.hatch.build.targets.wheel]
packages = ["linedispatch"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
