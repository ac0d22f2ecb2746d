[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "salesreport"
version = "0.1.0"
description = "Load sales CSV exports into a relational database and serve sales metrics over HTTP"
requires-python = ">=3.10"
keywords = ["sales", "report", "csv", "analytics", "flask", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "sqlalchemy>=2.0",
    "flask>=2.2",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
salesreport = "salesreport.main:main"

[tool.hatch.build.targets.wheel]
packages = ["salesreport"]

[tool.pytest.ini_options]
addopts = "-ra"
