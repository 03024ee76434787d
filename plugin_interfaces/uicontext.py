"""Contexts handed to plugin UI code."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CreationContext:
    """Information available to a plugin when it is created."""

    plugin_id: str
    config: dict[str, str] = field(default_factory=dict)


@dataclass
class Theme:
    is_dark: bool = False


@dataclass
class UiState:
    frame_count: int = 0
    time: float = 0.0


@dataclass
class Context:
    """Runtime context for one UI update."""

    plugin_id: str
    theme: Theme = field(default_factory=Theme)
    ui_state: UiState = field(default_factory=UiState)
    ui_event_data: dict[str, str] = field(default_factory=dict)

    def get_ui_event_data(self, component_id: str) -> str | None:
        """Value the frontend sent for a component, if any."""
        return self.ui_event_data.get(component_id)