"""Plugin metadata, chat history and the per-instance plugin context."""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .callbacks import HostCallbacks
from .hostlog import log_error
from .stream import (
    OPEN_STATUSES,
    STREAM_MANAGER,
    InvalidStreamState,
    SendFailed,
    StreamAlreadyEnded,
    StreamCancelled,
    StreamControlData,
    StreamDataData,
    StreamEndData,
    StreamInfo,
    StreamManager,
    StreamMessageData,
    StreamMessageWrapper,
    StreamNotFound,
    StreamStartData,
    StreamStatus,
)

_id_lock = threading.Lock()
_last_ns = 0


def _unique_ns() -> int:
    """Current time in nanoseconds, strictly increasing across calls."""
    global _last_ns
    with _id_lock:
        _last_ns = max(time.time_ns(), _last_ns + 1)
        return _last_ns


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _nul_free(*texts: str) -> bool:
    return all("\0" not in text for text in texts)


def build_message_payload(plugin_id: str, instance_id: str, content: str) -> dict[str, Any]:
    """Build the payload of a ``plugin-message`` event."""
    return {
        "message_type": "plugin_message",
        "plugin_id": plugin_id,
        "instance_id": instance_id,
        "message_id": f"message_{_unique_ns()}",
        "content": content,
        "timestamp": _now_millis(),
    }


def _require(data: dict[str, Any], key: str, owner: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"missing field '{key}' in {owner}") from exc


@dataclass
class PluginMetadata:
    """Descriptive information about a plugin instance."""

    id: str
    disabled: bool
    name: str
    description: str
    version: str
    author: str | None = None
    library_path: str | None = None
    config_path: str = ""
    instance_id: str | None = None
    require_history: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "disabled": self.disabled,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "author": self.author,
            "library_path": self.library_path,
            "config_path": self.config_path,
            "instance_id": self.instance_id,
            "require_history": self.require_history,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PluginMetadata":
        """Build metadata from a mapping; optional fields may be absent."""
        owner = "plugin metadata"
        return cls(
            id=_require(data, "id", owner),
            disabled=_require(data, "disabled", owner),
            name=_require(data, "name", owner),
            description=_require(data, "description", owner),
            version=_require(data, "version", owner),
            author=data.get("author"),
            library_path=data.get("library_path"),
            config_path=_require(data, "config_path", owner),
            instance_id=data.get("instance_id"),
            require_history=_require(data, "require_history", owner),
        )


@dataclass
class HistoryMessage:
    """One message of the current conversation, as sent by the host."""

    id: str
    message_type: str
    status: str
    content: str
    plugin_id: str
    role: str
    created_at: str

    _WIRE_NAMES = (
        ("id", "id"),
        ("message_type", "type"),
        ("status", "status"),
        ("content", "content"),
        ("plugin_id", "pluginId"),
        ("role", "role"),
        ("created_at", "createdAt"),
    )

    def to_dict(self) -> dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in self._WIRE_NAMES}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryMessage":
        return cls(
            **{attr: _require(data, wire, "history message") for attr, wire in cls._WIRE_NAMES}
        )


@dataclass
class PluginInstanceContext:
    """All state belonging to one running plugin instance."""

    instance_id: str
    metadata: PluginMetadata
    callbacks: HostCallbacks | None = None
    history: list[HistoryMessage] | None = None
    streams: StreamManager = field(default=STREAM_MANAGER, repr=False)

    def set_callbacks(self, callbacks: HostCallbacks) -> None:
        self.callbacks = callbacks

    def set_history(self, history: Iterable[HistoryMessage]) -> None:
        self.history = list(history)

    def get_history(self) -> list[HistoryMessage] | None:
        """Return the history; complains if the plugin never asked for it."""
        if not self.metadata.require_history:
            log_error(
                f"Plugin '{self.metadata.id}' does not set require_history config, "
                "but get_history was called."
            )
        return self.history

    def clear_history(self) -> None:
        self.history = None

    @property
    def _target_instance(self) -> str:
        return self.metadata.instance_id if self.metadata.instance_id is not None else self.metadata.id

    def send_to_frontend(self, event: str, payload: str) -> bool:
        """Send an event to the frontend through the host; True on success."""
        if self.callbacks is None or not _nul_free(event, payload):
            return False
        return bool(self.callbacks.send_to_frontend(event, payload))

    @staticmethod
    def _as_text(result: Any) -> str | None:
        if isinstance(result, str):
            return result
        if isinstance(result, (bytes, bytearray)):
            try:
                return bytes(result).decode("utf-8")
            except UnicodeDecodeError:
                return None
        return None

    def get_app_config(self, key: str) -> str | None:
        """Ask the host for an application setting."""
        if self.callbacks is None or not _nul_free(key):
            return None
        return self._as_text(self.callbacks.get_app_config(key))

    def call_other_plugin(self, plugin_id: str, message: str) -> str | None:
        """Send a message to another plugin through the host and return its reply."""
        if self.callbacks is None or not _nul_free(plugin_id, message):
            return None
        return self._as_text(self.callbacks.call_other_plugin(plugin_id, message))

    def send_message_to_frontend(self, content: str) -> bool:
        payload = build_message_payload(self.metadata.id, self._target_instance, content)
        return self.send_to_frontend("plugin-message", _dumps(payload))

    def refresh_ui(self) -> bool:
        payload = {"plugin": self.metadata.id, "instance": self._target_instance}
        return self.send_to_frontend("plugin-ui-refreshed", _dumps(payload))

    def call_disconnect(self) -> bool:
        """Ask the frontend to disconnect this instance."""
        payload = {
            "plugin_id": self.metadata.id,
            "instance_id": self._target_instance,
            "timestamp": _now_millis(),
        }
        return self.send_to_frontend("plugin-disconnect-request", _dumps(payload))

    # Streaming

    def _send_stream(self, message_type: str, data: StreamMessageData) -> bool:
        wrapper = StreamMessageWrapper(
            type=message_type,
            plugin_id=self.metadata.id,
            instance_id=self._target_instance,
            data=data,
            timestamp=_now_millis(),
        )
        return self.send_to_frontend("plugin-stream", wrapper.to_json())

    def _existing_status(self, stream_id: str) -> StreamStatus:
        status = self.streams.status(stream_id)
        if status is None:
            raise StreamNotFound()
        return status

    def send_message_stream_start(self) -> str:
        """Open a new stream and return its id."""
        stream_id = f"stream_{_unique_ns()}"
        data = StreamStartData(stream_id=stream_id, message_type="stream_start")
        if not self._send_stream("stream_start", data):
            raise SendFailed()
        self.streams.register(
            StreamInfo(
                id=stream_id,
                plugin_id=self.metadata.id,
                message_type="plugin_stream",
                status=StreamStatus.ACTIVE,
                created_at=int(time.time()),
            )
        )
        return stream_id

    def send_message_stream(self, stream_id: str, chunk: str, is_final: bool) -> None:
        self._existing_status(stream_id)
        data = StreamDataData(stream_id=stream_id, chunk=chunk, is_final=is_final)
        if not self._send_stream("stream_data", data):
            raise StreamCancelled()
        if is_final:
            self.streams.set_status(stream_id, StreamStatus.FINALIZING)

    def send_message_stream_end(
        self, stream_id: str, success: bool, error_msg: str | None = None
    ) -> None:
        self._existing_status(stream_id)
        data = StreamEndData(stream_id=stream_id, success=success, error=error_msg)
        if not self._send_stream("stream_end", data):
            raise SendFailed()
        self.streams.set_status(
            stream_id, StreamStatus.COMPLETED if success else StreamStatus.ERROR
        )

    def _control(
        self,
        stream_id: str,
        message_type: str,
        allowed: frozenset[StreamStatus],
        new_status: StreamStatus,
        refusal: type[Exception],
    ) -> None:
        if self._existing_status(stream_id) not in allowed:
            raise refusal()
        self.streams.set_status(stream_id, new_status)
        if not self._send_stream(message_type, StreamControlData(stream_id=stream_id)):
            raise SendFailed()

    def send_message_stream_pause(self, stream_id: str) -> None:
        self._control(
            stream_id,
            "stream_pause",
            frozenset({StreamStatus.ACTIVE}),
            StreamStatus.PAUSED,
            InvalidStreamState,
        )

    def send_message_stream_resume(self, stream_id: str) -> None:
        self._control(
            stream_id,
            "stream_resume",
            frozenset({StreamStatus.PAUSED}),
            StreamStatus.ACTIVE,
            InvalidStreamState,
        )

    def send_message_stream_cancel(self, stream_id: str) -> None:
        self._control(
            stream_id,
            "stream_cancel",
            OPEN_STATUSES,
            StreamStatus.CANCELLED,
            StreamAlreadyEnded,
        )

    def get_stream_status(self, stream_id: str) -> StreamStatus | None:
        return self.streams.status(stream_id)

    def list_active_streams(self) -> list[str]:
        return self.streams.active_ids()

    def send_message_stream_batch(self, stream_id: str, chunks: Sequence[str]) -> None:
        """Send several chunks; the last one is marked final."""
        status = self._existing_status(stream_id)
        if status is StreamStatus.PAUSED:
            raise InvalidStreamState()
        if status not in OPEN_STATUSES:
            raise StreamAlreadyEnded()

        chunks = list(chunks)
        last = len(chunks) - 1
        for position, chunk in enumerate(chunks):
            data = StreamDataData(stream_id=stream_id, chunk=chunk, is_final=position == last)
            if not self._send_stream("stream_data", data):
                raise SendFailed()

        if chunks:
            self.streams.set_status(stream_id, StreamStatus.FINALIZING)