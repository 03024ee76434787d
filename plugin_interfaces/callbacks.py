"""Host-provided callbacks, stored per plugin instance."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, repr=False)
class HostCallbacks:
    """Functions the host hands to a plugin instance."""

    send_to_frontend: Callable[[str, str], bool]
    get_app_config: Callable[[str], "str | None"]
    call_other_plugin: Callable[[str, str], "str | None"]

    def __repr__(self) -> str:
        return (
            "HostCallbacks(send_to_frontend=<function pointer>, "
            "get_app_config=<function pointer>, "
            "call_other_plugin=<function pointer>)"
        )


_lock = threading.Lock()
_instance_callbacks: dict[str, HostCallbacks] = {}


def set_host_callbacks(instance_id: str, callbacks: HostCallbacks) -> None:
    """Store the callbacks for an instance, replacing any previous ones."""
    with _lock:
        _instance_callbacks[instance_id] = callbacks


def get_host_callbacks(instance_id: str) -> HostCallbacks | None:
    """Return the callbacks stored for an instance, if any."""
    with _lock:
        return _instance_callbacks.get(instance_id)


def clear_host_callbacks(instance_id: str) -> bool:
    """Forget an instance's callbacks; True if there were any."""
    with _lock:
        return _instance_callbacks.pop(instance_id, None) is not None