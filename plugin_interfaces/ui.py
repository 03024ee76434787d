"""Immediate-mode UI builder used by plugins to describe their interface."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, TypeVar

from .components import (
    Button,
    ComboBox,
    Horizontal,
    Label,
    Response,
    TextEdit,
    Toggle,
    UiComponent,
    Vertical,
)

T = TypeVar("T")
R = TypeVar("R")


class LayoutContext(Enum):
    """Layout a component is currently being added to."""

    ROOT = "root"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _parse_index(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        return int(digits)
    return None


def _parse_bool(text: str) -> bool | None:
    return {"true": True, "false": False}.get(text)


class Ui:
    """Collects the components a plugin adds during one frame.

    Interactive widgets return ``(value, response)``: the value as updated from
    frontend events, and the :class:`Response` describing what happened.
    """

    def __init__(self, plugin_id: str) -> None:
        self.plugin_id = plugin_id
        self._components: list[UiComponent] = []
        self._layout_stack: list[LayoutContext] = [LayoutContext.ROOT]
        self._clicked: set[str] = set()
        self._changed: set[str] = set()
        self._event_data: dict[str, str] = {}

    @property
    def layout(self) -> LayoutContext:
        """The innermost layout components are currently added to."""
        return self._layout_stack[-1]

    def _add(self, component: UiComponent) -> None:
        self._components.append(component)

    def label(self, text: str) -> None:
        """Add a text label."""
        self._add(UiComponent(id=f"label_{uuid.uuid4()}", component=Label(text=text)))

    def button(self, text: str) -> Response:
        """Add a button; the response says whether it was clicked this frame."""
        component_id = f"button_{len(self._components)}_{text.replace(' ', '_')}"
        self._add(UiComponent(id=component_id, component=Button(text=text, enabled=True)))
        return Response(clicked=component_id in self._clicked, component_id=component_id)

    def text_edit_singleline(self, value: str) -> tuple[str, Response]:
        """Add a single-line text editor."""
        component_id = f"textedit_{len(self._components)}"
        was_changed = component_id in self._changed
        if was_changed and component_id in self._event_data:
            value = self._event_data[component_id]
        self._add(UiComponent(id=component_id, component=TextEdit(value=value, hint="")))
        return value, Response(changed=was_changed, component_id=component_id)

    def combo_box(
        self, options: Sequence[T], selected: T | None, placeholder: str
    ) -> tuple[T | None, Response]:
        """Add a dropdown; a selection not among ``options`` becomes ``None``."""
        options = list(options)
        component_id = f"combo_{len(self._components)}_{placeholder.replace(' ', '_')}"
        was_clicked = component_id in self._clicked
        was_changed = component_id in self._changed
        if was_changed and component_id in self._event_data:
            index = _parse_index(self._event_data[component_id])
            if index is not None:
                selected = options[index] if index < len(options) else None

        selected_index: int | None = None
        if selected is not None:
            selected_index = next(
                (position for position, option in enumerate(options) if option == selected),
                None,
            )
            if selected_index is None:
                selected = None

        self._add(
            UiComponent(
                id=component_id,
                component=ComboBox(
                    options=[str(option) for option in options],
                    selected=selected_index,
                    placeholder=placeholder,
                ),
            )
        )
        return selected, Response(
            clicked=was_clicked, changed=was_changed, component_id=component_id
        )

    def toggle(self, value: bool) -> tuple[bool, Response]:
        """Add a toggle switch."""
        component_id = f"toggle_{len(self._components)}"
        was_clicked = component_id in self._clicked
        was_changed = component_id in self._changed
        if was_changed and component_id in self._event_data:
            parsed = _parse_bool(self._event_data[component_id])
            if parsed is not None:
                value = parsed
        self._add(UiComponent(id=component_id, component=Toggle(value=value)))
        return value, Response(
            clicked=was_clicked, changed=was_changed, component_id=component_id
        )

    def _group(
        self,
        layout: LayoutContext,
        prefix: str,
        kind: Callable[[list[UiComponent]], Any],
        add_contents: Callable[["Ui"], R],
    ) -> R:
        self._layout_stack.append(layout)
        start = len(self._components)
        try:
            result = add_contents(self)
            children = self._components[start:]
            del self._components[start:]
            if children:
                self._add(UiComponent(id=f"{prefix}_{uuid.uuid4()}", component=kind(children)))
        finally:
            self._layout_stack.pop()
        return result

    def horizontal(self, add_contents: Callable[["Ui"], R]) -> R:
        """Lay out what ``add_contents`` adds in a row; returns its result."""
        return self._group(
            LayoutContext.HORIZONTAL,
            "horizontal",
            lambda children: Horizontal(children=children),
            add_contents,
        )

    def vertical(self, add_contents: Callable[["Ui"], R]) -> R:
        """Lay out what ``add_contents`` adds in a column; returns its result."""
        return self._group(
            LayoutContext.VERTICAL,
            "vertical",
            lambda children: Vertical(children=children),
            add_contents,
        )

    def get_components(self) -> list[UiComponent]:
        """The top-level components added so far."""
        return list(self._components)

    def clear(self) -> None:
        """Drop components and this frame's events."""
        self._components.clear()
        self.clear_events()

    def clear_components_only(self) -> None:
        """Drop components but keep pending events."""
        self._components.clear()

    def clear_events(self) -> None:
        """Forget clicks, changes and event values."""
        self._clicked.clear()
        self._changed.clear()
        self._event_data.clear()

    def handle_ui_event(self, component_id: str, value: str) -> bool:
        """Record a frontend event; False if the component kind is unknown."""
        self._event_data[component_id] = value
        if component_id.startswith(("combo_", "toggle_")):
            self._clicked.add(component_id)
            self._changed.add(component_id)
        elif component_id.startswith("button_"):
            self._clicked.add(component_id)
        elif component_id.startswith("textedit_"):
            self._changed.add(component_id)
        else:
            return False
        return True