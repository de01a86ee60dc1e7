from playlist_remix.pipeline import (
    ArtistTally,
    cap_songs_per_artist,
    exclude_history,
    filter_by_market,
    filter_member_tracks,
)


def test_filter_by_market_keeps_us_tracks_in_order(make_track) -> None:
    tracks = [
        make_track("t1", markets=["US"]),
        make_track("t2", markets=["CA"]),
        make_track("t3", markets=["US"]),
    ]

    result = filter_by_market(tracks, "US")

    assert [t.uri for t in result] == ["t1", "t3"]


def test_exclude_history_drops_used_uris(make_track) -> None:
    tracks = [make_track("t1"), make_track("t2"), make_track("t3")]

    result = exclude_history(tracks, {"t2"})

    assert [t.uri for t in result] == ["t1", "t3"]


def test_cap_songs_per_artist_drops_track_over_cap(make_track) -> None:
    tracks = [
        make_track("t1", artists=["1"]),
        make_track("t2", artists=["1", "2"]),
        make_track("t3", artists=["1"]),
    ]

    result = cap_songs_per_artist(tracks, max_per_artist=2)

    assert [t.uri for t in result] == ["t1", "t2"]


def test_cap_counts_every_artist_of_a_dropped_track(make_track) -> None:
    tracks = [
        make_track("t1", artists=["a"]),
        # dropped because of "a", but "b" is still counted
        make_track("t2", artists=["a", "b"]),
        make_track("t3", artists=["b"]),
        make_track("t4", artists=["b"]),
    ]

    tally = ArtistTally()
    result = cap_songs_per_artist(tracks, max_per_artist=1, tally=tally)

    assert [t.uri for t in result] == ["t1"]
    assert tally.counts == {"a": 2, "b": 3}


def test_shared_tally_spans_calls(make_track) -> None:
    tally = ArtistTally()

    first = cap_songs_per_artist([make_track("t1", artists=["x"])], 1, tally)
    second = cap_songs_per_artist([make_track("t2", artists=["x"])], 1, tally)

    assert [t.uri for t in first] == ["t1"]
    assert second == []


def test_filter_member_tracks_applies_full_chain(make_track) -> None:
    tracks = [
        make_track("old", artists=["a"]),
        make_track("ca-only", artists=["a"], markets=["CA"]),
        make_track("t1", artists=["a"]),
        make_track("t2", artists=["a"]),
        make_track("t3", artists=["a"]),
        make_track("t4", artists=["a"]),
    ]

    result = filter_member_tracks(tracks, {"old"}, market="US", max_per_artist=3)

    # history and market filters run before the cap, so they do not use it up
    assert [t.uri for t in result] == ["t1", "t2", "t3"]


def test_filter_member_tracks_uses_fresh_tally_per_call(make_track) -> None:
    batch = [make_track(f"t{i}", artists=["a"]) for i in range(3)]

    first = filter_member_tracks(batch, set(), max_per_artist=3)
    second = filter_member_tracks(batch, set(), max_per_artist=3)

    assert len(first) == 3
    assert len(second) == 3
