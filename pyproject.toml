[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coolpack"
version = "0.0.2"
description = "Detect a Node.js project's framework and package manager, plan its build and generate a Dockerfile"
requires-python = ">=3.10"
dependencies = []
keywords = ["docker", "dockerfile", "buildpack", "nodejs", "containers", "build"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["coolpack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
