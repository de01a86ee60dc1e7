"""End-to-end playlist refresh.

refresh() queues populate_playlist() on the shared KeyedSerialQueue under
`playlist-<id>`, so refreshes of one playlist run strictly one after the
other while different playlists refresh in parallel.

Inside a refresh the states are:

  Idle -> Queued -> Fetching -> Aggregating -> Interleaving -> Persisting
         -> Notifying (designated playlist only) -> Done

Any failure before notifying ends in Failed and is raised to the caller;
persistence failures surface as PersistenceError. A failed notification,
whatever the sink raised, is only logged.
"""

from enum import Enum
from typing import List, Optional, Sequence

from playlist_remix.config import NOTIFY_CHANNEL, NOTIFY_PLAYLIST_ID, PLAYLIST_BATCH_SIZE
from playlist_remix.core import (
    CuratedTrack,
    PersistenceError,
    Playlist,
    PlaylistHasNoMembers,
    PlaylistNotFound,
    RefreshResult,
    log_error,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from playlist_remix.data import JsonPlaylistStore
from playlist_remix.notify import SlackNotifier
from playlist_remix.spotify import SpotifyCatalog

from .aggregator import get_all_music
from .generator import round_robin_sort
from .queue import KeyedSerialQueue
from .quota import songs_per_member


class RefreshState(str, Enum):
    IDLE = "idle"
    QUEUED = "queued"
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    INTERLEAVING = "interleaving"
    PERSISTING = "persisting"
    NOTIFYING = "notifying"
    DONE = "done"
    FAILED = "failed"


def queue_key(playlist_id: str) -> str:
    return f"playlist-{playlist_id}"


def remove_all_playlist_tracks(
    catalog: SpotifyCatalog,
    playlist_id: str,
    access_token: str,
    uris: Sequence[str],
    batch_size: int = PLAYLIST_BATCH_SIZE,
) -> int:
    """Remove `uris` from the playlist in batches; returns the number of calls."""
    calls = 0
    for i in range(0, len(uris), batch_size):
        catalog.remove_tracks(playlist_id, access_token, list(uris[i : i + batch_size]))
        calls += 1
    return calls


class PlaylistRefresher:
    def __init__(
        self,
        queue: KeyedSerialQueue,
        store: JsonPlaylistStore,
        catalog: SpotifyCatalog,
        notifier: Optional[SlackNotifier] = None,
        notify_playlist_id: Optional[str] = NOTIFY_PLAYLIST_ID,
        notify_channel: str = NOTIFY_CHANNEL,
    ) -> None:
        self.queue = queue
        self.store = store
        self.catalog = catalog
        self.notifier = notifier
        self.notify_playlist_id = notify_playlist_id
        self.notify_channel = notify_channel

    def refresh(self, playlist_id: str, is_new: bool = False) -> RefreshResult:
        """Refresh one playlist, waiting for earlier refreshes of it to finish."""
        key = queue_key(playlist_id)
        self._transition(playlist_id, RefreshState.IDLE)
        self._transition(playlist_id, RefreshState.QUEUED)
        return self.queue.run_exclusive(
            key, lambda: self.populate_playlist(playlist_id, is_new)
        )

    def populate_playlist(self, playlist_id: str, is_new: bool = False) -> RefreshResult:
        log_section(f"Refreshing playlist {playlist_id}")

        self._transition(playlist_id, RefreshState.FETCHING)
        try:
            playlist = self.store.get_playlist(playlist_id, is_new)
            if playlist is None:
                raise PlaylistNotFound(playlist_id)
            if not playlist.members:
                raise PlaylistHasNoMembers(playlist_id)
        except Exception:
            self._transition(playlist_id, RefreshState.FAILED)
            raise

        try:
            self._transition(playlist_id, RefreshState.AGGREGATING)
            quota = songs_per_member(len(playlist.members))
            log_info(f"{len(playlist.members)} members, {quota} songs each.")
            music = get_all_music(
                self.catalog, playlist.members, quota, set(playlist.history)
            )

            self._transition(playlist_id, RefreshState.INTERLEAVING)
            ordered = round_robin_sort(music)
        except Exception:
            self._transition(playlist_id, RefreshState.FAILED)
            raise

        self._transition(playlist_id, RefreshState.PERSISTING)
        try:
            self._replace_playlist_tracks(playlist, ordered)
        except Exception as exc:
            self._transition(playlist_id, RefreshState.FAILED)
            log_error(f"Unable to write playlist {playlist_id}: {exc}")
            raise PersistenceError(
                f"Unable to write new order for playlist {playlist_id}: {exc}"
            ) from exc

        result = RefreshResult(playlist_id=playlist_id, tracks=ordered)
        if self._should_notify(playlist):
            self._transition(playlist_id, RefreshState.NOTIFYING)
            result.notification = self._notify(playlist, ordered)

        self._transition(playlist_id, RefreshState.DONE)
        log_success(f"Playlist {playlist_id} refreshed with {len(ordered)} songs.")
        return result

    def _replace_playlist_tracks(
        self, playlist: Playlist, ordered: List[CuratedTrack]
    ) -> None:
        token = playlist.owner.access_token
        current = self.catalog.get_playlist_tracks(playlist.playlist_id, token)
        log_step(f"Removing {len(current)} songs from {playlist.playlist_id}...")
        remove_all_playlist_tracks(self.catalog, playlist.playlist_id, token, current)
        log_step(f"Adding {len(ordered)} songs to {playlist.playlist_id}...")
        self.catalog.add_tracks(token, playlist.playlist_id, ordered)
        self.store.save_tracks(playlist, ordered)

    def _should_notify(self, playlist: Playlist) -> bool:
        return (
            self.notifier is not None
            and self.notify_playlist_id is not None
            and playlist.playlist_id == self.notify_playlist_id
        )

    def _notify(self, playlist: Playlist, ordered: List[CuratedTrack]) -> Optional[dict]:
        try:
            blocks = self.notifier.build_message(ordered, playlist.members)
            self.notifier.send_message(
                self.notify_channel, "Data about the playlist", blocks
            )
        except Exception as exc:  # noqa: BLE001
            log_warning(f"Refresh notification for {playlist.playlist_id} failed: {exc}")
            return None
        return {"channel": self.notify_channel, "blocks": blocks}

    @staticmethod
    def _transition(playlist_id: str, state: RefreshState) -> None:
        log_info(f"[{queue_key(playlist_id)}] {state.value}")
