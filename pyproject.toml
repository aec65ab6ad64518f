[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "circleci-tui"
version = "0.1.0"
description = "Building blocks for a keyboard-driven terminal monitor of CircleCI pipelines"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
    "platformdirs",
]
keywords = ["circleci", "tui", "terminal", "ci-cd", "monitoring", "pipelines"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
circleci-tui-facets = "circleci_tui.faceted_demo:main"

[tool.hatch.build.targets.wheel]
packages = ["circleci_tui"]

[tool.hatch.build.targets.sdist]
include = ["circleci_tui", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
