[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shortlinks"
version = "6.0.3"
description = "Storage and link-handling core for a small self-hosted URL shortener, backed by SQLite."
requires-python = ">=3.10"
dependencies = []
keywords = ["url-shortener", "shortener", "link-shortener", "sqlite", "self-hosted"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shortlinks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
