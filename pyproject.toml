[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consoleart"
version = "7.0"
description = "Image format readers and writers (PCX, DCX, PPM, PNG, JPEG, TGA, GIF, Radiance HDR) with small numeric helpers"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["image", "pcx", "dcx", "ppm", "png", "tga", "gif", "hdr", "radiance", "statistics"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["consoleart"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
