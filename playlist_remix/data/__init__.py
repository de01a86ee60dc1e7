"""Public façade for the playlist_remix.data package.

This module exposes the JSON-backed playlist store. Callers should use this
façade instead of importing from the internal store module directly.
"""

from .store import JsonPlaylistStore

__all__ = ["JsonPlaylistStore"]
