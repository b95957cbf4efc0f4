[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hanzitools"
version = "5.1.8"
description = "Chinese text helpers: simplified/traditional conversion, full-width characters, pinyin and stroke lookup, and cloud pinyin requests"
requires-python = ">=3.10"
dependencies = []
keywords = ["chinese", "pinyin", "hanzi", "fullwidth", "stroke", "traditional", "simplified"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Natural Language :: Chinese (Traditional)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hanzitools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
