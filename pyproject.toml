[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kuruk"
version = "1.0.0"
description = "Voronoi graph path search, field model and simulator protocol helpers for small-size robot soccer"
requires-python = ">=3.10"
dependencies = []
keywords = ["robocup", "ssl", "voronoi", "path-planning", "simulator", "robotics", "heatmap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kuruk"]

[tool.pytest.ini_options]
addopts = "-ra"
