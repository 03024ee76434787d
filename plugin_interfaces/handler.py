"""Base class for plugin implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .callbacks import HostCallbacks
from .hostlog import log_info
from .metadata import PluginInstanceContext, PluginMetadata
from .uicontext import Context
from .ui import Ui


def _describe(metadata: PluginMetadata) -> str:
    instance = metadata.instance_id if metadata.instance_id is not None else "None"
    return (
        f"id={metadata.id}, name={metadata.name}, "
        f"version={metadata.version}, instance_id={instance}"
    )


class PluginHandler(ABC):
    """Lifecycle hooks of a plugin; state lives in the instance context."""

    def initialize(
        self, callbacks: HostCallbacks, metadata: PluginMetadata
    ) -> PluginInstanceContext:
        """Create the instance context; the metadata must carry an instance id."""
        if metadata.instance_id is None:
            raise ValueError("Instance ID is required for plugin initialization")
        context = PluginInstanceContext(instance_id=metadata.instance_id, metadata=metadata)
        context.set_callbacks(callbacks)
        return context

    @abstractmethod
    def update_ui(self, ctx: Context, ui: Ui, plugin_ctx: PluginInstanceContext) -> None:
        """Build the plugin's UI for one frame."""

    def on_mount(self, plugin_ctx: PluginInstanceContext) -> None:
        metadata = plugin_ctx.metadata
        log_info(f"[{metadata.name}] Plugin mount successfully")
        log_info(f"Config Metadata: {_describe(metadata)}")

    def on_dispose(self, plugin_ctx: PluginInstanceContext) -> None:
        log_info(f"Plugin disposed successfully. Metadata: {_describe(plugin_ctx.metadata)}")

    def on_connect(self, plugin_ctx: PluginInstanceContext) -> None:
        log_info(f"Plugin connect successfully. Metadata: {_describe(plugin_ctx.metadata)}")

    def on_disconnect(self, plugin_ctx: PluginInstanceContext) -> None:
        log_info(f"Plugin disconnect successfully. Metadata: {_describe(plugin_ctx.metadata)}")

    def handle_message(self, message: str, plugin_ctx: PluginInstanceContext) -> str:
        """Echo the message back and forward a note to the frontend."""
        metadata = plugin_ctx.metadata
        log_info(
            f"Plugin Receive Message. Metadata: {_describe(metadata)}, "
            f"require_history={str(metadata.require_history).lower()}"
        )

        history_info = ""
        if metadata.require_history:
            history = plugin_ctx.get_history()
            if history is not None:
                history_info = f"（包含 {len(history)} 条历史记录）"
            else:
                history_info = "（无历史记录）"

        response = f"Echo from {metadata.name}: {message}{history_info}"
        plugin_ctx.send_message_to_frontend(f"[{metadata.name}]收到消息：{message}{history_info}")
        return response

    def get_metadata(self, plugin_ctx: PluginInstanceContext) -> PluginMetadata:
        return plugin_ctx.metadata

    def send_message_to_frontend(self, content: str, plugin_ctx: PluginInstanceContext) -> bool:
        """Send a chat message to the frontend for this instance."""
        return plugin_ctx.send_message_to_frontend(content)

    def refresh_ui(self, plugin_ctx: PluginInstanceContext) -> bool:
        """Ask the frontend to redraw this instance's UI."""
        return plugin_ctx.refresh_ui()