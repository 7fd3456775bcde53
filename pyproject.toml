[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ctxswitch"
version = "0.1.0"
description = "Round-robin scheduling and context-switch simulator with a small Tk view of process control blocks"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "scheduling",
    "round robin",
    "context switch",
    "process control block",
    "simulation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ctxswitch = "ctxswitch.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ctxswitch"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
