# plugin-interfaces

This package provides the building blocks for writing plugins for a chat-client host
application. It has no dependencies outside the standard library.

A plugin is a subclass of `PluginHandler`. Each running instance gets a
`PluginInstanceContext`, which holds:

- the instance's `PluginMetadata`,
- the `HostCallbacks` the host supplied,
- an optional conversation history, a list of `HistoryMessage`.

## Modules

| Module | What it holds |
| --- | --- |
| `plugin_interfaces.handler` | `PluginHandler`, the base class with the lifecycle hooks and default behaviour for each. |
| `plugin_interfaces.wrapper` | `PluginWrapper`, which drives one handler and its instance context. It raises `PluginNotInitialized` when a lifecycle call arrives before `initialize`. |
| `plugin_interfaces.metadata` | `PluginMetadata`, `HistoryMessage`, `PluginInstanceContext`, `build_message_payload`. |
| `plugin_interfaces.callbacks` | `HostCallbacks`, plus `set_host_callbacks`, `get_host_callbacks` and `clear_host_callbacks`, a thread-safe registry keyed by instance id. |
| `plugin_interfaces.stream` | Stream payload types, `StreamStatus`, `StreamManager` with the shared `STREAM_MANAGER`, and the `StreamError` family. |
| `plugin_interfaces.ui` | `Ui`, the immediate-mode UI builder, and `LayoutContext`. |
| `plugin_interfaces.components` | `Response` and the serialisable component types: `UiComponent`, `Label`, `Button`, `TextEdit`, `SelectableValue`, `ComboBox`, `Toggle`, `Horizontal`, `Vertical`. |
| `plugin_interfaces.uicontext` | `Context`, `CreationContext`, `Theme`, `UiState`. |
| `plugin_interfaces.config` | `PluginConfig` and `ConfigError`, for reading the `[plugin]` table of a `config.toml`. |
| `plugin_interfaces.hostlog` | Coloured console logging: `log_error`, `log_warn`, `log_info`, `log_debug`, `log_trace`, `log_print`, `format_log_line`, `with_color`, `LogLevel` and `ColorCode`. |

## Installation

```
pip install plugin-interfaces
```

## A minimal plugin

```python
from plugin_interfaces.handler import PluginHandler


class EchoPlugin(PluginHandler):
    def __init__(self):
        self.text = ""
        self.enabled = False

    def update_ui(self, ctx, ui, plugin_ctx):
        ui.label("Echo plugin")
        self.text = ui.text_edit_singleline(self.text)[0]
        if ui.button("Send").clicked:
            plugin_ctx.send_message_to_frontend(self.text)
        self.enabled = ui.toggle(self.enabled)[0]
```

`update_ui` is the only method a subclass must write. The other hooks have defaults:

- `on_mount`, `on_dispose`, `on_connect` and `on_disconnect` log a line through
  `plugin_interfaces.hostlog`.
- `handle_message` replies `"Echo from <name>: <message>"` and also sends a `plugin-message`
  event to the frontend.
- When the metadata sets `require_history`, both the reply and the event also say how many
  history entries the instance holds.

## Driving a plugin

A host runs a plugin through `PluginWrapper`:

```python
from plugin_interfaces.callbacks import HostCallbacks
from plugin_interfaces.metadata import PluginMetadata
from plugin_interfaces.wrapper import PluginWrapper


def send_to_frontend(event, payload):
    print(event, payload)
    return True


callbacks = HostCallbacks(
    send_to_frontend=send_to_frontend,
    get_app_config=lambda key: None,
    call_other_plugin=lambda plugin_id, message: None,
)
metadata = PluginMetadata(
    id="echo",
    disabled=False,
    name="Echo",
    description="Echoes messages back",
    version="0.1.0",
    instance_id="echo-1",
)

wrapper = PluginWrapper(EchoPlugin())
wrapper.initialize(callbacks, metadata)  # ValueError if instance_id is None
wrapper.on_mount()
print(wrapper.handle_message("hi"))      # Echo from Echo: hi
```

`PluginWrapper.set_history` takes one of two arguments:

- a JSON array of history objects, each with the keys `id`, `type`, `status`, `content`,
  `pluginId`, `role` and `createdAt`; the wrapper stores them in the context.
- `None`, which clears the history.

Before initialisation, the wrapper behaves like this:

- `update_ui` does nothing.
- `get_metadata` returns empty metadata.
- The other lifecycle calls raise `PluginNotInitialized`.

## Talking to the host

`PluginInstanceContext` sends everything through the host callbacks. Each method below
returns `False` or `None` when the context has no callbacks.

- `send_to_frontend(event, payload)` forwards a raw event.
- `send_message_to_frontend(content)` sends a `plugin-message` event.
- `refresh_ui()` sends a `plugin-ui-refreshed` event.
- `call_disconnect()` sends a `plugin-disconnect-request` event.
- `get_app_config(key)` asks the host for an application setting and returns its text.
- `call_other_plugin(plugin_id, message)` sends a message to another plugin and returns its
  reply as text.

The payloads of these events are compact JSON.

## Streaming a reply

```python
stream_id = plugin_ctx.send_message_stream_start()
plugin_ctx.send_message_stream(stream_id, "Hello, ", False)
plugin_ctx.send_message_stream(stream_id, "world", True)
plugin_ctx.send_message_stream_end(stream_id, True, None)
```

Every stream event goes to the frontend as a `plugin-stream` event. Its body is a
`StreamMessageWrapper` serialised with `to_json`.

The other stream calls are:

- `send_message_stream_batch(stream_id, chunks)`, which marks the last chunk as final.
- `send_message_stream_pause(stream_id)`, `send_message_stream_resume(stream_id)` and
  `send_message_stream_cancel(stream_id)`.
- `get_stream_status(stream_id)` and `list_active_streams()`.

Stream state is tracked in the process-wide `STREAM_MANAGER`. Failures raise a subclass of
`StreamError`:

| Exception | Raised when |
| --- | --- |
| `StreamNotFound` | The stream id is unknown. |
| `InvalidStreamState` | You pause a stream that is not active, resume one that is not paused, or batch-send to a paused stream. |
| `StreamAlreadyEnded` | The stream is already completed, errored or cancelled. |
| `SendFailed` | The host reported that sending failed. |
| `StreamCancelled` | A single chunk could not be delivered. |

## Building a UI

`Ui` collects the components added during one frame.

Return values:

- `label(text)` returns nothing.
- `button(text)` returns a `Response`.
- `text_edit_singleline(value)`, `combo_box(options, selected, placeholder)` and
  `toggle(value)` return `(new_value, response)`.
- `horizontal(fn)` and `vertical(fn)` call `fn(ui)` and wrap whatever it added in a layout
  component.

Component ids depend on the component's position in the frame, for example `textedit_1` or
`button_2_Send`. The frontend reports interactions through
`ui.handle_ui_event(component_id, value)`, which records them until the events are cleared:

```python
from plugin_interfaces.ui import Ui
from plugin_interfaces.uicontext import Context

ui = Ui("echo")
ui.handle_ui_event("textedit_1", "hello")
wrapper.update_ui(Context("echo"), ui)
print([component.to_dict() for component in ui.get_components()])
```

Three methods reset the builder between frames:

- `clear()` drops both the components and the pending events.
- `clear_components_only()` drops only the components.
- `clear_events()` drops only the events.

`UiComponent.to_dict` and `UiComponent.from_dict` convert components to and from plain
dictionaries.

## Plugin configuration

```toml
[plugin]
id = "echo"
name = "Echo"
description = "Echoes messages back"
version = "0.1.0"
author = "Someone"
```

```python
from plugin_interfaces.config import PluginConfig

config = PluginConfig.from_file("config.toml")
```

`PluginConfig.from_toml` parses TOML text directly.

- The keys `id`, `name`, `description` and `version` are required. If one is missing,
  `ConfigError` is raised.
- `disabled` defaults to `False`.
- `author` is optional.

## What this package does not do

- It does not load plugins from files and does not provide a host application.
- It has no frontend that renders the UI components or receives the events.

The host is whatever code constructs `HostCallbacks` and calls `PluginWrapper`.

## Running the tests

```
pip install -e ".[test]"
pytest
```