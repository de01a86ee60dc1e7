"""Public façade for the playlist_remix.spotify package.

This module exposes the Spotify Web API integration used by the refresh
pipeline: track retrieval, playlist editing and the SpotifyCatalog object
that bundles them. Callers should import these symbols from this façade
instead of the internal http, tracks, or playlists modules.
"""

from .catalog import SpotifyCatalog
from .http import spotify_headers, spotify_request
from .playlists import (
    add_tracks_to_playlist,
    create_playlist,
    follow_playlist,
    get_playlist_tracks,
    get_user_playlists,
    remove_playlist_tracks,
)
from .tracks import get_liked_tracks, get_top_tracks, parse_track

__all__ = [
    "SpotifyCatalog",
    "spotify_headers",
    "spotify_request",
    "parse_track",
    "get_top_tracks",
    "get_liked_tracks",
    "get_playlist_tracks",
    "remove_playlist_tracks",
    "add_tracks_to_playlist",
    "get_user_playlists",
    "create_playlist",
    "follow_playlist",
]
