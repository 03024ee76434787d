import pytest

from plugin_interfaces.components import (
    Button,
    ComboBox,
    Horizontal,
    Label,
    TextEdit,
    Toggle,
    Vertical,
)
from plugin_interfaces.ui import LayoutContext, Ui


@pytest.fixture
def ui():
    return Ui("demo")


def test_plugin_id(ui):
    assert ui.plugin_id == "demo"


def test_label_added(ui):
    ui.label("hello")
    (component,) = ui.get_components()
    assert component.id.startswith("label_")
    assert component.component == Label(text="hello")


def test_label_ids_unique(ui):
    ui.label("a")
    ui.label("a")
    first, second = ui.get_components()
    assert first.id != second.id
    assert first.component == second.component


def test_button_id_and_click(ui):
    response = ui.button("Click me")
    assert response.component_id == "button_0_Click_me"
    assert response.clicked is False
    assert ui.get_components()[0].component == Button(text="Click me", enabled=True)

    ui.clear_components_only()
    assert ui.handle_ui_event(response.component_id, "") is True
    again = ui.button("Click me")
    assert again.component_id == response.component_id
    assert again.clicked is True
    assert again.changed is False


def test_button_id_depends_on_position(ui):
    ui.label("x")
    response = ui.button("go")
    assert response.component_id.startswith("button_1_")


def test_text_edit_updates_value(ui):
    value, response = ui.text_edit_singleline("old")
    assert value == "old"
    assert response.changed is False

    ui.clear_components_only()
    assert ui.handle_ui_event(response.component_id, "new") is True
    value, response = ui.text_edit_singleline("old")
    assert value == "new"
    assert response.changed is True
    assert response.clicked is False
    assert ui.get_components()[0].component == TextEdit(value="new", hint="")


def test_combo_box_selection_from_event(ui):
    options = ["a", "b", "c"]
    selected, response = ui.combo_box(options, None, "Pick one")
    assert selected is None
    assert response.component_id.startswith("combo_0_")
    assert " " not in response.component_id

    ui.clear_components_only()
    ui.handle_ui_event(response.component_id, "1")
    selected, response = ui.combo_box(options, None, "Pick one")
    assert selected == options[1]
    assert response.clicked and response.changed
    assert ui.get_components()[0].component == ComboBox(
        options=options, selected=1, placeholder="Pick one"
    )


def test_combo_box_out_of_range_clears(ui):
    options = ["a", "b"]
    _, response = ui.combo_box(options, "a", "p")
    ui.clear_components_only()
    ui.handle_ui_event(response.component_id, "5")
    selected, _ = ui.combo_box(options, "a", "p")
    assert selected is None


def test_combo_box_unparsable_keeps_selection(ui):
    options = ["a", "b"]
    _, response = ui.combo_box(options, "b", "p")
    ui.clear_components_only()
    ui.handle_ui_event(response.component_id, "abc")
    selected, _ = ui.combo_box(options, "b", "p")
    assert selected == "b"
    assert ui.get_components()[0].component.selected == options.index("b")


def test_combo_box_unknown_selection_reset(ui):
    selected, _ = ui.combo_box(["a", "b"], "z", "p")
    assert selected is None
    assert ui.get_components()[0].component.selected is None


def test_combo_box_stringifies_options(ui):
    selected, _ = ui.combo_box([1, 2], 2, "n")
    assert selected == 2
    assert ui.get_components()[0].component.options == ["1", "2"]


def test_toggle_from_event(ui):
    value, response = ui.toggle(False)
    assert value is False
    ui.clear_components_only()
    ui.handle_ui_event(response.component_id, "true")
    value, response = ui.toggle(False)
    assert value is True
    assert response.clicked and response.changed
    assert ui.get_components()[0].component == Toggle(value=True)


def test_toggle_bad_value_ignored(ui):
    _, response = ui.toggle(True)
    ui.clear_components_only()
    ui.handle_ui_event(response.component_id, "yes")
    value, _ = ui.toggle(True)
    assert value is True


def test_horizontal_groups_children(ui):
    ui.label("before")

    def contents(inner):
        assert inner.layout is LayoutContext.HORIZONTAL
        inner.label("one")
        inner.button("two")
        return 42

    assert ui.horizontal(contents) == 42
    assert ui.layout is LayoutContext.ROOT
    before, group = ui.get_components()
    assert isinstance(before.component, Label)
    assert group.id.startswith("horizontal_")
    assert isinstance(group.component, Horizontal)
    assert [child.component.text for child in group.component.children] == ["one", "two"]


def test_vertical_nested(ui):
    def inner_row(inner):
        inner.label("x")

    def column(inner):
        inner.horizontal(inner_row)
        inner.label("y")

    ui.vertical(column)
    (group,) = ui.get_components()
    assert isinstance(group.component, Vertical)
    row, label = group.component.children
    assert isinstance(row.component, Horizontal)
    assert label.component == Label(text="y")


def test_empty_layout_adds_nothing(ui):
    assert ui.vertical(lambda inner: None) is None
    assert ui.get_components() == []


def test_layout_restored_after_exception(ui):
    def broken(inner):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        ui.horizontal(broken)
    assert ui.layout is LayoutContext.ROOT


def test_handle_ui_event_unknown_prefix(ui):
    assert ui.handle_ui_event("slider_0", "3") is False


def test_clear_drops_events(ui):
    response = ui.button("ok")
    ui.handle_ui_event(response.component_id, "")
    ui.clear()
    assert ui.get_components() == []
    assert ui.button("ok").clicked is False


def test_clear_events_keeps_components(ui):
    response = ui.button("ok")
    ui.handle_ui_event(response.component_id, "")
    ui.clear_events()
    assert len(ui.get_components()) == 1
    ui.clear_components_only()
    assert ui.button("ok").clicked is False