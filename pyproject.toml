[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plugin-interfaces"
version = "0.1.2"
description = "Building blocks for chat-client plugins: lifecycle handlers, host callbacks, streaming messages and an immediate-mode UI builder"
requires-python = ">=3.11"
dependencies = []
keywords = ["plugin", "chat", "ui", "streaming", "callbacks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["plugin_interfaces"]

[tool.pytest.ini_options]
addopts = "-ra"
