[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edgeboot"
version = "0.1.0"
description = "Bootstrap building blocks for edge microservices: configuration types, dependency injection, startup timers, config map merging and insecure secret handling."
requires-python = ">=3.10"
dependencies = []
keywords = ["bootstrap", "microservices", "dependency-injection", "configuration", "secrets", "edge"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["edgeboot"]

[tool.pytest.ini_options]
addopts = "-ra"
