"""ReelChat — chat-style movie and series recommendations over a webhook."""

__version__ = "1.0.0"
