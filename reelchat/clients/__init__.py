"""
ReelChat — Outbound clients.
"""

from reelchat.clients.webhook import close_client, search_movies

__all__ = ["close_client", "search_movies"]
