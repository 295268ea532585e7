[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "speculo"
version = "0.1.0"
description = "Reputation scores and vote settlement storage for prediction markets"
requires-python = ">=3.10"
dependencies = []
keywords = ["prediction-market", "reputation", "commit-reveal", "voting", "settlement", "bech32"]
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
    "Topic :: Office/Business :: Financial",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["speculo"]

[tool.pytest.ini_options]
addopts = "-ra"
