"""TaskDesk - personal task manager with a keyboard-driven batch editor."""

__version__ = "1.0.0"
