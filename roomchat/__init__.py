"""Room-based chat backend: presence tracking and bounded message history."""

__version__ = "1.0.0"
