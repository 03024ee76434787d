"""Lifecycle handlers, host callbacks, streaming messages, configuration and a UI builder for chat-client plugins."""

__version__ = "0.1.2"