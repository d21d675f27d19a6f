[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vsphere-infra"
version = "0.4.0"
description = "Infrastructure resource types, validation rules and cloud provider configuration encoding for vSphere-backed clusters"
requires-python = ">=3.10"
dependencies = []
keywords = ["vsphere", "cluster", "infrastructure", "validation", "ini", "cloud-provider"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vsphere_infra"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
