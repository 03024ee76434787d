"""Holds a plugin handler together with the context of its running instance."""

from __future__ import annotations

import json
from typing import Any

from .callbacks import HostCallbacks
from .handler import PluginHandler
from .metadata import HistoryMessage, PluginInstanceContext, PluginMetadata
from .ui import Ui
from .uicontext import Context


class PluginNotInitialized(RuntimeError):
    """A lifecycle call was made before the plugin was initialised."""

    def __init__(self, message: str = "Plugin has not been initialized") -> None:
        super().__init__(message)


def _empty_metadata() -> PluginMetadata:
    return PluginMetadata(
        id="",
        disabled=False,
        name="",
        description="",
        version="",
        author=None,
        library_path=None,
        config_path="",
        instance_id=None,
        require_history=False,
    )


def _parse_history(history_json: str) -> list[HistoryMessage]:
    entries: Any = json.loads(history_json)
    if not isinstance(entries, list):
        raise ValueError("history must be a JSON array")
    messages = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError("history entries must be JSON objects")
        messages.append(HistoryMessage.from_dict(entry))
    return messages


class PluginWrapper:
    """Drives a :class:`PluginHandler` through its lifecycle for one instance."""

    def __init__(self, handler: PluginHandler) -> None:
        self.handler = handler
        self.context: PluginInstanceContext | None = None

    def _require_context(self) -> PluginInstanceContext:
        if self.context is None:
            raise PluginNotInitialized()
        return self.context

    def initialize(self, callbacks: HostCallbacks, metadata: PluginMetadata) -> None:
        """Let the handler build the instance context and keep it."""
        self.context = self.handler.initialize(callbacks, metadata)

    def update_ui(self, ctx: Context, ui: Ui) -> None:
        """Let the handler build its UI; does nothing before initialisation."""
        if self.context is not None:
            self.handler.update_ui(ctx, ui, self.context)

    def on_mount(self) -> None:
        self.handler.on_mount(self._require_context())

    def on_dispose(self) -> None:
        self.handler.on_dispose(self._require_context())

    def on_connect(self) -> None:
        self.handler.on_connect(self._require_context())

    def on_disconnect(self) -> None:
        self.handler.on_disconnect(self._require_context())

    def handle_message(self, message: str) -> str:
        """Pass a message to the handler and return its reply."""
        return self.handler.handle_message(message, self._require_context())

    def set_history(self, history_json: str | None) -> None:
        """Replace the history from a JSON array, or clear it when given ``None``."""
        if history_json is None:
            self._require_context().clear_history()
            return
        history = _parse_history(history_json)
        self._require_context().set_history(history)

    def get_metadata(self) -> PluginMetadata:
        """The handler's metadata, or empty metadata before initialisation."""
        if self.context is None:
            return _empty_metadata()
        return self.handler.get_metadata(self.context)