[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linkgraph"
version = "0.1.0"
description = "Crawl web pages into a link graph, cluster it, lay it out and serve it as JSON"
requires-python = ">=3.10"
keywords = ["crawler", "web", "graph", "links", "layout", "visualization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
linkgraph = "linkgraph.server:main"

[tool.hatch.build.targets.wheel]
packages = ["linkgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
