"""pmo: a minimal desktop Pomodoro timer with a local session log."""

__version__ = "0.1.0"

__all__ = ["__version__"]
