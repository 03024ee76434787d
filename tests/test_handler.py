import json

import pytest

from plugin_interfaces.callbacks import HostCallbacks
from plugin_interfaces.handler import PluginHandler
from plugin_interfaces.metadata import HistoryMessage, PluginMetadata
from plugin_interfaces.ui import Ui
from plugin_interfaces.uicontext import Context


class EchoPlugin(PluginHandler):
    def update_ui(self, ctx, ui, plugin_ctx):
        ui.label(plugin_ctx.metadata.name)


class Recorder:
    def __init__(self, result=True):
        self.sent = []
        self.result = result

    def callbacks(self):
        def send(event, payload):
            self.sent.append((event, payload))
            return self.result

        return HostCallbacks(
            send_to_frontend=send,
            get_app_config=lambda key: None,
            call_other_plugin=lambda plugin_id, message: None,
        )


def make_metadata(instance_id="inst-1", require_history=False):
    return PluginMetadata(
        id="demo",
        disabled=False,
        name="Demo",
        description="demo plugin",
        version="0.1.0",
        config_path="config.toml",
        instance_id=instance_id,
        require_history=require_history,
    )


def make_history():
    return [
        HistoryMessage(
            id=f"m{n}",
            message_type="normal",
            status="completed",
            content="hello",
            plugin_id="demo",
            role="user",
            created_at="2024-01-01T00:00:00Z",
        )
        for n in range(2)
    ]


def test_handler_is_abstract():
    with pytest.raises(TypeError):
        PluginHandler()


def test_initialize_builds_context():
    recorder = Recorder()
    metadata = make_metadata()
    ctx = EchoPlugin().initialize(recorder.callbacks(), metadata)
    assert ctx.instance_id == metadata.instance_id
    assert ctx.metadata is metadata
    assert ctx.callbacks is not None
    assert ctx.send_to_frontend("evt", "data") is True
    assert recorder.sent == [("evt", "data")]


def test_initialize_requires_instance_id():
    with pytest.raises(ValueError, match="Instance ID is required"):
        EchoPlugin().initialize(Recorder().callbacks(), make_metadata(instance_id=None))


def test_handle_message_echo_and_forward():
    recorder = Recorder()
    plugin = EchoPlugin()
    ctx = plugin.initialize(recorder.callbacks(), make_metadata())
    reply = plugin.handle_message("hi", ctx)
    assert reply == "Echo from Demo: hi"
    ((event, payload),) = recorder.sent
    assert event == "plugin-message"
    body = json.loads(payload)
    assert body["content"] == "[Demo]收到消息：hi"
    assert body["instance_id"] == "inst-1"


def test_handle_message_with_history():
    recorder = Recorder()
    plugin = EchoPlugin()
    ctx = plugin.initialize(recorder.callbacks(), make_metadata(require_history=True))
    ctx.set_history(make_history())
    reply = plugin.handle_message("hi", ctx)
    assert reply == "Echo from Demo: hi（包含 2 条历史记录）"


def test_handle_message_history_missing():
    plugin = EchoPlugin()
    ctx = plugin.initialize(Recorder().callbacks(), make_metadata(require_history=True))
    reply = plugin.handle_message("hi", ctx)
    assert reply.endswith("（无历史记录）")


def test_lifecycle_hooks_log(capsys):
    plugin = EchoPlugin()
    ctx = plugin.initialize(Recorder().callbacks(), make_metadata())
    plugin.on_mount(ctx)
    plugin.on_connect(ctx)
    plugin.on_disconnect(ctx)
    plugin.on_dispose(ctx)
    out = capsys.readouterr().out
    assert "[Demo] Plugin mount successfully" in out
    assert "Plugin connect successfully" in out
    assert "Plugin disconnect successfully" in out
    assert "Plugin disposed successfully" in out
    assert "instance_id=inst-1" in out


def test_get_metadata_returns_context_metadata():
    plugin = EchoPlugin()
    metadata = make_metadata()
    ctx = plugin.initialize(Recorder().callbacks(), metadata)
    assert plugin.get_metadata(ctx) is metadata


def test_refresh_ui_payload():
    recorder = Recorder()
    plugin = EchoPlugin()
    ctx = plugin.initialize(recorder.callbacks(), make_metadata())
    assert plugin.refresh_ui(ctx) is True
    ((event, payload),) = recorder.sent
    assert event == "plugin-ui-refreshed"
    assert json.loads(payload) == {"plugin": "demo", "instance": "inst-1"}


def test_send_message_to_frontend_reports_host_result():
    recorder = Recorder(result=False)
    plugin = EchoPlugin()
    ctx = plugin.initialize(recorder.callbacks(), make_metadata())
    assert plugin.send_message_to_frontend("text", ctx) is False
    assert json.loads(recorder.sent[0][1])["content"] == "text"


def test_update_ui_builds_components():
    plugin = EchoPlugin()
    ctx = plugin.initialize(Recorder().callbacks(), make_metadata())
    ui = Ui("demo")
    plugin.update_ui(Context(plugin_id="demo"), ui, ctx)
    (component,) = ui.get_components()
    assert component.component.text == "Demo"