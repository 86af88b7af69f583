[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bbskit"
version = "0.1.0"
description = "Read and write the on-disk and shared-memory data of PTT-style and FormosaBBS bulletin board systems"
requires-python = ">=3.10"
dependencies = []
keywords = ["bbs", "pttbbs", "formosabbs", "big5", "crypt", "bulletin-board"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: BBS",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bbskit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
