[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assertkit"
version = "0.1.0"
description = "Assertion expressions, matchers, nested sections and test-run reporters (console, TeamCity, XML)"
requires-python = ">=3.10"
dependencies = []
keywords = ["testing", "assertions", "matchers", "reporter", "teamcity", "xml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing :: Unit",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["assertkit"]

[tool.pytest.ini_options]
addopts = "-ra"
