"""Streaming message types and the in-process stream registry."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any


class StreamError(Exception):
    """Base class for streaming failures."""

    default_message = "Stream error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class SendFailed(StreamError):
    default_message = "Failed to send message to frontend"


class InvalidStreamId(StreamError):
    default_message = "Invalid stream ID"


class StreamNotFound(StreamError):
    default_message = "Stream not found"


class StreamAlreadyEnded(StreamError):
    default_message = "Stream already ended"


class InvalidStreamState(StreamError):
    default_message = "Invalid stream state"


class StreamCancelled(StreamError):
    default_message = "Stream was cancelled by user"


class StreamStatus(Enum):
    """Lifecycle state of a stream."""

    ACTIVE = "active"
    PAUSED = "paused"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"


OPEN_STATUSES = frozenset({StreamStatus.ACTIVE, StreamStatus.PAUSED, StreamStatus.FINALIZING})


@dataclass
class StreamInfo:
    """What the registry knows about one stream."""

    id: str
    plugin_id: str
    message_type: str
    status: StreamStatus
    created_at: int


@dataclass(frozen=True)
class StreamStartData:
    stream_id: str
    message_type: str

    def to_dict(self) -> dict[str, Any]:
        return {"stream_id": self.stream_id, "message_type": self.message_type}


@dataclass(frozen=True)
class StreamDataData:
    stream_id: str
    chunk: str
    is_final: bool

    def to_dict(self) -> dict[str, Any]:
        return {"stream_id": self.stream_id, "chunk": self.chunk, "is_final": self.is_final}


@dataclass(frozen=True)
class StreamEndData:
    stream_id: str
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"stream_id": self.stream_id, "success": self.success, "error": self.error}


@dataclass(frozen=True)
class StreamControlData:
    stream_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"stream_id": self.stream_id}


StreamMessageData = StreamStartData | StreamDataData | StreamEndData | StreamControlData


@dataclass(frozen=True)
class StreamMessageWrapper:
    """Envelope sent to the frontend for every stream event."""

    type: str
    plugin_id: str
    instance_id: str
    data: StreamMessageData
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "plugin_id": self.plugin_id,
            "instance_id": self.instance_id,
            "data": self.data.to_dict(),
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


class StreamManager:
    """Thread-safe registry of streams keyed by stream id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._streams: dict[str, StreamInfo] = {}

    def register(self, info: StreamInfo) -> None:
        with self._lock:
            self._streams[info.id] = info

    def status(self, stream_id: str) -> StreamStatus | None:
        with self._lock:
            info = self._streams.get(stream_id)
            return info.status if info else None

    def set_status(self, stream_id: str, status: StreamStatus) -> bool:
        """Change a stream's status; False if the stream is unknown."""
        with self._lock:
            info = self._streams.get(stream_id)
            if info is None:
                return False
            info.status = status
            return True

    def active_ids(self) -> list[str]:
        """Ids of streams that are active, paused or finalizing."""
        with self._lock:
            return [sid for sid, info in self._streams.items() if info.status in OPEN_STATUSES]

    def clear(self) -> None:
        with self._lock:
            self._streams.clear()

    def __contains__(self, stream_id: object) -> bool:
        with self._lock:
            return stream_id in self._streams

    def __len__(self) -> int:
        with self._lock:
            return len(self._streams)


STREAM_MANAGER = StreamManager()