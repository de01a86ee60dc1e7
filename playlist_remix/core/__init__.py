"""Public façade for the playlist_remix.core package.

This module exposes logging helpers, filesystem utilities, the domain models
and the error taxonomy. Other packages should import these cross-cutting
concerns from this façade instead of the internal submodules.
"""

from .errors import (
    MemberNotFound,
    NotificationError,
    PersistenceError,
    PlaylistHasNoMembers,
    PlaylistNotFound,
    RemixError,
    SourceFetchError,
    SpotifyApiError,
)
from .fs_utils import ensure_parent_dir, read_json, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_debug,
    log_error,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    Artist,
    CuratedTrack,
    Member,
    MemberSongSet,
    Playlist,
    PlaylistOverview,
    RefreshResult,
    Track,
    TrackPage,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_debug",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "ensure_parent_dir",
    "write_json",
    "read_json",
    "Artist",
    "Track",
    "CuratedTrack",
    "Member",
    "MemberSongSet",
    "Playlist",
    "PlaylistOverview",
    "RefreshResult",
    "TrackPage",
    "RemixError",
    "SourceFetchError",
    "SpotifyApiError",
    "PlaylistNotFound",
    "MemberNotFound",
    "PlaylistHasNoMembers",
    "PersistenceError",
    "NotificationError",
]
