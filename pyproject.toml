[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nearapi"
version = "0.1.0"
description = "Client library and command-line tools for the NEAR Protocol JSON-RPC API"
requires-python = ">=3.10"
keywords = ["near", "blockchain", "json-rpc", "ed25519", "borsh", "rpc-client"]
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
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
near-block = "nearapi.cli_block:main"
near-edkeypair = "nearapi.cli_edkeypair:main"
near-funcall = "nearapi.cli_funcall:main"
near-genesis = "nearapi.cli_genesis:main"
near-keys = "nearapi.cli_keys:main"
near-transfer = "nearapi.cli_transfer:main"

[tool.hatch.build.targets.wheel]
packages = ["nearapi"]

[tool.hatch.build.targets.sdist]
include = ["nearapi", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
