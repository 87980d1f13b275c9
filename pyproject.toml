[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bookshelf"
version = "0.1.0"
description = "A small book catalogue: REST services over MongoDB and an HTML front end that renders their data"
requires-python = ">=3.10"
keywords = ["books", "catalogue", "rest", "mongodb", "flask", "microservices"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask",
    "pymongo",
    "requests",
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
bookshelf-get = "bookshelf.services:main_get"
bookshelf-post = "bookshelf.services:main_post"
bookshelf-put = "bookshelf.services:main_put"
bookshelf-delete = "bookshelf.services:main_delete"
bookshelf-monolith = "bookshelf.monolith:main"
bookshelf-web = "bookshelf.web:main"

[tool.hatch.build.targets.wheel]
packages = ["bookshelf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
