[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yapexpr"
version = "0.1.0"
description = "Lazy expression trees built from Python operators, with evaluation and transforms."
requires-python = ">=3.10"
dependencies = []
keywords = ["expression templates", "lazy evaluation", "expression tree", "transform", "placeholders"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["yapexpr"]

[tool.pytest.ini_options]
addopts = "-ra"
