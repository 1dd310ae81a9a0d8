[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pipeflow"
version = "0.1.0"
description = "Composable asyncio stream-processing pipelines built from channel-connected nodes"
requires-python = ">=3.10"
dependencies = []
keywords = ["pipeline", "stream", "asyncio", "channels", "dataflow", "md5"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
pipeflow-md5 = "pipeflow.flows:main"

[tool.hatch.build.targets.wheel]
packages = ["pipeflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
