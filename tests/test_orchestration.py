import logging
from pathlib import Path
from typing import List

import pytest

from playlist_remix.core import (
    NotificationError,
    PersistenceError,
    PlaylistHasNoMembers,
    PlaylistNotFound,
    SpotifyApiError,
    write_json,
)
from playlist_remix.data import JsonPlaylistStore
from playlist_remix.pipeline import (
    KeyedSerialQueue,
    PlaylistRefresher,
    queue_key,
    remove_all_playlist_tracks,
)
from playlist_remix.pipeline import orchestration


def _store_with_playlist(tmp_path: Path, members, playlist_id: str = "p1") -> JsonPlaylistStore:
    store = JsonPlaylistStore(str(tmp_path / "playlists.json"))
    for member in members:
        store.save_member(member)
    store.create_playlist(members[0], playlist_id)
    for member in members[1:]:
        store.add_member(playlist_id, member)
    return store


def _tracks(make_track, prefix: str, count: int) -> List:
    return [make_track(f"{prefix}{i}", artists=[f"{prefix}-artist{i}"]) for i in range(count)]


def test_refresh_two_members_interleaves_top_songs(
    tmp_path: Path, make_track, make_member, fake_catalog_cls
) -> None:
    m1, m2 = make_member("m1"), make_member("m2")
    store = _store_with_playlist(tmp_path, [m1, m2])
    catalog = fake_catalog_cls(
        top={"m1": _tracks(make_track, "a", 3), "m2": _tracks(make_track, "b", 3)},
        playlist_tracks={"p1": ["old1", "old2"]},
    )
    queue = KeyedSerialQueue()
    refresher = PlaylistRefresher(queue, store, catalog, notifier=None)

    result = refresher.refresh("p1")

    assert [s.uri for s in result.tracks] == ["a0", "b0", "a1", "b1", "a2", "b2"]
    assert catalog.removed == [["old1", "old2"]]
    assert catalog.added == [["a0", "b0", "a1", "b1", "a2", "b2"]]
    assert store.get_playlist("p1").history == ["a0", "b0", "a1", "b1", "a2", "b2"]
    assert result.notification is None
    assert queue.keys() == []


def test_refresh_excludes_history(tmp_path: Path, make_track, make_member, fake_catalog_cls) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    catalog = fake_catalog_cls(top={"m1": _tracks(make_track, "a", 3)})
    refresher = PlaylistRefresher(KeyedSerialQueue(), store, catalog)

    first = refresher.refresh("p1")
    second = refresher.refresh("p1")

    assert [s.uri for s in first.tracks] == ["a0", "a1", "a2"]
    assert second.tracks == []


def test_refresh_one_member_failure_keeps_others(
    tmp_path: Path, make_track, make_member, fake_catalog_cls
) -> None:
    m1, m2 = make_member("m1"), make_member("m2")
    store = _store_with_playlist(tmp_path, [m1, m2])
    catalog = fake_catalog_cls(
        top={"m1": SpotifyApiError("expired token", 401), "m2": _tracks(make_track, "b", 2)},
        liked={"m1": SpotifyApiError("expired token", 401)},
    )
    refresher = PlaylistRefresher(KeyedSerialQueue(), store, catalog)

    result = refresher.refresh("p1")

    assert [s.uri for s in result.tracks] == ["b0", "b1"]


def test_refresh_unknown_playlist_raises_and_cleans_queue(
    tmp_path: Path, fake_catalog_cls
) -> None:
    store = JsonPlaylistStore(str(tmp_path / "playlists.json"))
    queue = KeyedSerialQueue()
    refresher = PlaylistRefresher(queue, store, fake_catalog_cls())

    with pytest.raises(PlaylistNotFound):
        refresher.refresh("missing")

    assert queue.keys() == []


def test_refresh_playlist_without_members(tmp_path: Path, make_member, fake_catalog_cls) -> None:
    owner = make_member("m1")
    path = tmp_path / "playlists.json"
    write_json(
        path,
        {
            "members": {
                "m1": {
                    "id": "m1",
                    "spotify_id": owner.spotify_id,
                    "access_token": owner.access_token,
                }
            },
            "playlists": {
                "p1": {
                    "playlist_id": "p1",
                    "owner_id": "m1",
                    "member_ids": [],
                    "history": [],
                }
            },
        },
    )
    store = JsonPlaylistStore(str(path))
    refresher = PlaylistRefresher(KeyedSerialQueue(), store, fake_catalog_cls())

    with pytest.raises(PlaylistHasNoMembers):
        refresher.refresh("p1")


def test_refresh_write_failure_is_persistence_error(
    tmp_path: Path, make_track, make_member, fake_catalog_cls
) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    catalog = fake_catalog_cls(top={"m1": _tracks(make_track, "a", 2)})
    catalog.add_error = SpotifyApiError("server error", 500)
    queue = KeyedSerialQueue()
    refresher = PlaylistRefresher(queue, store, catalog)

    with pytest.raises(PersistenceError):
        refresher.refresh("p1")

    # nothing recorded as the new playlist
    assert store.get_playlist("p1").history == []
    assert queue.keys() == []


def test_refresh_notifies_designated_playlist(
    tmp_path: Path, make_track, make_member, fake_catalog_cls, fake_notifier_cls
) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    catalog = fake_catalog_cls(top={"m1": _tracks(make_track, "a", 2)})
    notifier = fake_notifier_cls()
    refresher = PlaylistRefresher(
        KeyedSerialQueue(),
        store,
        catalog,
        notifier=notifier,
        notify_playlist_id="p1",
        notify_channel="#music",
    )

    result = refresher.refresh("p1")

    assert len(notifier.sent) == 1
    channel, text, blocks = notifier.sent[0]
    assert channel == "#music"
    assert result.notification == {"channel": "#music", "blocks": blocks}


def test_refresh_skips_notification_for_other_playlists(
    tmp_path: Path, make_track, make_member, fake_catalog_cls, fake_notifier_cls
) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    notifier = fake_notifier_cls()
    refresher = PlaylistRefresher(
        KeyedSerialQueue(),
        store,
        fake_catalog_cls(top={"m1": _tracks(make_track, "a", 1)}),
        notifier=notifier,
        notify_playlist_id="another",
    )

    refresher.refresh("p1")

    assert notifier.sent == []


def test_refresh_notification_failure_is_not_fatal(
    tmp_path: Path, make_track, make_member, fake_catalog_cls, fake_notifier_cls
) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    notifier = fake_notifier_cls(error=NotificationError("channel_not_found"))
    refresher = PlaylistRefresher(
        KeyedSerialQueue(),
        store,
        fake_catalog_cls(top={"m1": _tracks(make_track, "a", 2)}),
        notifier=notifier,
        notify_playlist_id="p1",
    )

    result = refresher.refresh("p1")

    assert [s.uri for s in result.tracks] == ["a0", "a1"]
    assert result.notification is None
    assert store.get_playlist("p1").history == ["a0", "a1"]


def test_refresh_unexpected_notifier_error_is_not_fatal(
    tmp_path: Path, make_track, make_member, fake_catalog_cls, fake_notifier_cls
) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    queue = KeyedSerialQueue()
    refresher = PlaylistRefresher(
        queue,
        store,
        fake_catalog_cls(top={"m1": _tracks(make_track, "a", 2)}),
        notifier=fake_notifier_cls(error=RuntimeError("socket closed")),
        notify_playlist_id="p1",
    )

    result = refresher.refresh("p1")

    assert [s.uri for s in result.tracks] == ["a0", "a1"]
    assert result.notification is None
    assert queue.keys() == []


def test_refresh_message_build_error_is_not_fatal(
    tmp_path: Path, make_track, make_member, fake_catalog_cls, fake_notifier_cls
) -> None:
    class BrokenMessageNotifier(fake_notifier_cls):
        def build_message(self, ordered, members=()):
            raise KeyError("spotify_id")

    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    notifier = BrokenMessageNotifier()
    refresher = PlaylistRefresher(
        KeyedSerialQueue(),
        store,
        fake_catalog_cls(top={"m1": _tracks(make_track, "a", 1)}),
        notifier=notifier,
        notify_playlist_id="p1",
    )

    result = refresher.refresh("p1")

    assert result.notification is None
    assert notifier.sent == []
    assert store.get_playlist("p1").history == ["a0"]


def test_refresh_logs_states_from_idle_to_done(
    tmp_path: Path, make_track, make_member, fake_catalog_cls, caplog: pytest.LogCaptureFixture
) -> None:
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    refresher = PlaylistRefresher(
        KeyedSerialQueue(), store, fake_catalog_cls(top={"m1": _tracks(make_track, "a", 1)})
    )

    with caplog.at_level(logging.INFO, logger="playlist_remix"):
        refresher.refresh("p1")

    states = [
        r.getMessage().split("] ", 1)[1]
        for r in caplog.records
        if r.getMessage().startswith("[playlist-p1] ")
    ]
    assert states == [
        "idle",
        "queued",
        "fetching",
        "aggregating",
        "interleaving",
        "persisting",
        "done",
    ]


def test_refresh_interleave_error_logs_failed(
    tmp_path: Path,
    make_track,
    make_member,
    fake_catalog_cls,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def broken_sort(songs):
        raise RuntimeError("bad owner id")

    monkeypatch.setattr(orchestration, "round_robin_sort", broken_sort)
    m1 = make_member("m1")
    store = _store_with_playlist(tmp_path, [m1])
    catalog = fake_catalog_cls(top={"m1": _tracks(make_track, "a", 1)})
    queue = KeyedSerialQueue()
    refresher = PlaylistRefresher(queue, store, catalog)

    with caplog.at_level(logging.INFO, logger="playlist_remix"):
        with pytest.raises(RuntimeError, match="bad owner id"):
            refresher.refresh("p1")

    messages = [r.getMessage() for r in caplog.records]
    assert "[playlist-p1] failed" in messages
    assert "[playlist-p1] persisting" not in messages
    assert catalog.added == []
    assert queue.keys() == []


def test_remove_all_playlist_tracks_uses_distinct_batches(fake_catalog_cls) -> None:
    catalog = fake_catalog_cls()
    uris = [f"u{i}" for i in range(250)]

    calls = remove_all_playlist_tracks(catalog, "p1", "token", uris)

    assert calls == 3
    assert [len(b) for b in catalog.removed] == [100, 100, 50]
    assert [u for batch in catalog.removed for u in batch] == uris


def test_remove_all_playlist_tracks_empty_playlist(fake_catalog_cls) -> None:
    catalog = fake_catalog_cls()

    assert remove_all_playlist_tracks(catalog, "p1", "token", []) == 0
    assert catalog.removed == []


def test_queue_key_format() -> None:
    assert queue_key("abc") == "playlist-abc"
