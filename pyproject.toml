[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "avltree"
version = "0.1.0"
description = "Intrusive order-statistic AVL tree with cursors, bound queries and O(log n) distance"
requires-python = ">=3.10"
dependencies = [
    "sortedcontainers",
]
keywords = [
    "avl",
    "tree",
    "balanced-tree",
    "intrusive",
    "order-statistic",
    "multiset",
    "data-structures",
]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
avltree-bench = "avltree.bench:main"

[tool.hatch.build.targets.wheel]
packages = ["avltree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
