"""UI component descriptions exchanged with the frontend."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class Response:
    """Outcome of adding an interactive component in one frame."""

    clicked: bool = False
    changed: bool = False
    hovered: bool = False
    component_id: str | None = None


@dataclass
class Label:
    text: str


@dataclass
class Button:
    text: str
    enabled: bool = True


@dataclass
class TextEdit:
    value: str
    hint: str = ""


@dataclass
class SelectableValue:
    options: list[str]
    selected: int


@dataclass
class ComboBox:
    options: list[str]
    selected: int | None = None
    placeholder: str = ""


@dataclass
class Toggle:
    value: bool


@dataclass
class Horizontal:
    children: list["UiComponent"] = field(default_factory=list)


@dataclass
class Vertical:
    children: list["UiComponent"] = field(default_factory=list)


ComponentKind = Label | Button | TextEdit | SelectableValue | ComboBox | Toggle | Horizontal | Vertical

_KINDS = {
    cls.__name__: cls
    for cls in (Label, Button, TextEdit, SelectableValue, ComboBox, Toggle, Horizontal, Vertical)
}


@dataclass
class UiComponent:
    """A component with its id, as serialised for the frontend."""

    id: str
    component: ComponentKind

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"type": type(self.component).__name__}
        for f in fields(self.component):
            value = getattr(self.component, f.name)
            if f.name == "children":
                value = [child.to_dict() for child in value]
            elif isinstance(value, list):
                value = list(value)
            body[f.name] = value
        return {"id": self.id, "component": body}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UiComponent":
        try:
            component_id = data["id"]
            body = data["component"]
            kind_name = body["type"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed component: {exc}") from exc

        kind = _KINDS.get(kind_name)
        if kind is None:
            raise ValueError(f"unknown component type: {kind_name!r}")

        kwargs: dict[str, Any] = {}
        for f in fields(kind):
            if f.name in body:
                value = body[f.name]
            elif f.default is None:
                value = None
            else:
                raise ValueError(f"missing field '{f.name}' for {kind_name}")
            if f.name == "children":
                value = [cls.from_dict(child) for child in value]
            kwargs[f.name] = value
        return cls(id=component_id, component=kind(**kwargs))