[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oslab"
version = "0.1.0"
description = "Small, testable models of operating-system mechanisms: atomics, locks, green threads, async tasks, page tables and TLBs"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "education",
    "spinlock",
    "rwlock",
    "green threads",
    "page table",
    "tlb",
    "sv39",
    "asyncio",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["oslab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
