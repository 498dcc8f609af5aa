[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nword"
version = "0.1.0"
description = "Build n-gram frequency tables from token files and query them for word continuations"
requires-python = ">=3.10"
dependencies = []
keywords = ["ngram", "n-gram", "trie", "corpus", "subtitles", "language-model"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
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

[project.scripts]
nword = "nword.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nword"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
