import pytest

from plugin_interfaces.callbacks import (
    HostCallbacks,
    clear_host_callbacks,
    get_host_callbacks,
    set_host_callbacks,
)


def _make(tag):
    return HostCallbacks(
        send_to_frontend=lambda event, payload: True,
        get_app_config=lambda key: f"{tag}:{key}",
        call_other_plugin=lambda plugin_id, message: None,
    )


@pytest.fixture(autouse=True)
def _clean():
    yield
    for name in ("inst-a", "inst-b"):
        clear_host_callbacks(name)


def test_set_and_get():
    callbacks = _make("a")
    set_host_callbacks("inst-a", callbacks)
    assert get_host_callbacks("inst-a") is callbacks


def test_missing_instance_returns_none():
    assert get_host_callbacks("inst-b") is None


def test_instances_are_independent():
    set_host_callbacks("inst-a", _make("a"))
    set_host_callbacks("inst-b", _make("b"))
    assert get_host_callbacks("inst-a").get_app_config("k") == "a:k"
    assert get_host_callbacks("inst-b").get_app_config("k") == "b:k"


def test_set_replaces_previous():
    set_host_callbacks("inst-a", _make("a"))
    replacement = _make("z")
    set_host_callbacks("inst-a", replacement)
    assert get_host_callbacks("inst-a") is replacement


def test_clear_reports_presence():
    set_host_callbacks("inst-a", _make("a"))
    assert clear_host_callbacks("inst-a") is True
    assert clear_host_callbacks("inst-a") is False
    assert get_host_callbacks("inst-a") is None


def test_repr_hides_functions():
    text = repr(_make("a"))
    assert text.count("<function pointer>") == 3
    assert "lambda" not in text