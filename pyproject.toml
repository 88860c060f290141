[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unimft"
version = "0.1.0"
description = "Generate unikernel application manifests as C source from a JSON description"
requires-python = ">=3.10"
dependencies = []
keywords = ["unikernel", "manifest", "code generation", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
unimft = "unimft.manifest:main"

[tool.hatch.build.targets.wheel]
packages = ["unimft"]

[tool.pytest.ini_options]
addopts = "-ra"
