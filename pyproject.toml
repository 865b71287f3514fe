[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bwxsdk"
version = "1.0.0"
description = "Text document model with gap-buffer storage, formatting runs, undo/redo and word-wrapped layout, plus colour helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gap buffer", "text document", "undo", "formatting", "layout", "word wrap", "colours"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bwxsdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
