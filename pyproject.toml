[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cavecall"
version = "1.15.5"
description = "Split-section planning, split list access and VCF header helpers for somatic substitution calling"
requires-python = ">=3.10"
dependencies = []
keywords = ["genomics", "variant-calling", "vcf", "somatic", "bioinformatics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cavecall"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
