[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dabmix"
version = "0.1.0"
description = "Fixed-point dab blending, spectral paint mixing and color-space helpers for raster brush engines"
requires-python = ">=3.10"
dependencies = []
keywords = ["brush", "painting", "blend modes", "spectral mixing", "color spaces", "ppm"]
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
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dabmix"]

[tool.pytest.ini_options]
addopts = "-ra"
