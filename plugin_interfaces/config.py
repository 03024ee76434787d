"""Reading a plugin's ``config.toml``."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass


class ConfigError(Exception):
    """The plugin configuration is malformed or incomplete."""


@dataclass
class PluginConfig:
    """The ``[plugin]`` section of a plugin configuration file."""

    id: str
    disabled: bool
    name: str
    description: str
    version: str
    author: str | None = None

    @classmethod
    def from_file(cls, path: str | os.PathLike[str] = "config.toml") -> "PluginConfig":
        """Read and parse the configuration file at ``path``."""
        with open(path, encoding="utf-8") as handle:
            return cls.from_toml(handle.read())

    @classmethod
    def from_toml(cls, text: str) -> "PluginConfig":
        """Parse configuration from TOML text."""
        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc

        if "plugin" not in document:
            raise ConfigError("Missing [plugin] section in config.toml")
        plugin = document["plugin"]
        if not isinstance(plugin, dict):
            plugin = {}

        def required(key: str) -> str:
            value = plugin.get(key)
            if not isinstance(value, str):
                raise ConfigError(f"Missing '{key}' in [plugin] section")
            return value

        disabled = plugin.get("disabled")
        author = plugin.get("author")
        return cls(
            id=required("id"),
            disabled=disabled if isinstance(disabled, bool) else False,
            name=required("name"),
            description=required("description"),
            version=required("version"),
            author=author if isinstance(author, str) else None,
        )