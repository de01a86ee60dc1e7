"""Public façade for the playlist_remix.pipeline package.

This module exposes the refresh engine: the per-key serial queue, the track
filters, quota computation, song aggregation, playlist generation and
interleaving, the refresher itself, and the membership helpers. Other
packages should import pipeline behaviour from this façade instead of the
internal pipeline submodules.
"""

from .aggregator import (
    gather_member_songs,
    get_all_music,
    get_liked_songs_if_necessary,
    get_top_songs,
)
from .filters import (
    ArtistTally,
    cap_songs_per_artist,
    exclude_history,
    filter_by_market,
    filter_member_tracks,
)
from .generator import generate_playlist, round_robin_sort
from .membership import (
    create_member_playlist,
    get_member_playlists,
    remove_playlists,
    subscribe_to_playlist,
)
from .orchestration import (
    PlaylistRefresher,
    RefreshState,
    queue_key,
    remove_all_playlist_tracks,
)
from .queue import KeyedSerialQueue
from .quota import songs_per_member

__all__ = [
    "KeyedSerialQueue",
    "ArtistTally",
    "exclude_history",
    "filter_by_market",
    "cap_songs_per_artist",
    "filter_member_tracks",
    "songs_per_member",
    "get_top_songs",
    "get_liked_songs_if_necessary",
    "gather_member_songs",
    "get_all_music",
    "generate_playlist",
    "round_robin_sort",
    "PlaylistRefresher",
    "RefreshState",
    "queue_key",
    "remove_all_playlist_tracks",
    "get_member_playlists",
    "subscribe_to_playlist",
    "remove_playlists",
    "create_member_playlist",
]
