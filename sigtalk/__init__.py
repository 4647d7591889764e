"""Text messages between processes, carried one bit at a time by user signals."""

__version__ = "0.1.0"
__all__ = ["client", "printf", "protocol", "server"]