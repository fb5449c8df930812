[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emiglio"
version = "0.1.0"
description = "Trading bot utilities: logging, JSON access, configuration and live market display formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["trading", "cryptocurrency", "paper-trading", "config", "json", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["emiglio"]

[tool.pytest.ini_options]
addopts = "-ra"
