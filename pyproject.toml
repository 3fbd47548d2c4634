[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfclient"
version = "0.1.0"
description = "Client library for the Cloud Foundry Cloud Controller API: spaces, space members, quotas, services, plans, usage events, users, stacks and tasks"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["cloudfoundry", "cf", "paas", "api", "client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["cfclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
