"""Gather each member's songs for a refresh.

For every member, top songs are fetched first (one call), then liked songs
page by page until the member's quota is covered or the library runs out.
Members are fetched in parallel with a thread pool; a member whose fetch
fails simply contributes fewer songs and never stops the refresh.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import AbstractSet, List, Optional, Sequence, Set

from playlist_remix.config import (
    AVAILABLE_MARKET,
    FETCH_MAX_WORKERS,
    MAX_SONGS_PER_ARTIST_PER_MEMBER,
)
from playlist_remix.core import (
    CuratedTrack,
    Member,
    MemberSongSet,
    Track,
    log_step,
    log_warning,
)
from playlist_remix.spotify import SpotifyCatalog

from .filters import filter_member_tracks
from .generator import generate_playlist


def _curate(tracks: Sequence[Track], member: Member) -> List[CuratedTrack]:
    return [CuratedTrack(track=t, owner_id=member.id) for t in tracks]


def _fetch_top_songs(
    catalog: SpotifyCatalog,
    member: Member,
    history: AbstractSet[str],
    market: str,
    max_per_artist: int,
) -> MemberSongSet:
    song_set = MemberSongSet(member=member)
    try:
        page = catalog.get_top_tracks(member)
    except Exception as exc:  # noqa: BLE001
        # One member's failure must not break the whole playlist.
        log_warning(f"Unable to get top songs for {member.spotify_id}: {exc}")
        return song_set

    filtered = filter_member_tracks(page.items, history, market, max_per_artist)
    song_set.top_tracks = _curate(filtered, member)
    return song_set


def get_top_songs(
    catalog: SpotifyCatalog,
    members: Sequence[Member],
    history: AbstractSet[str],
    market: str = AVAILABLE_MARKET,
    max_per_artist: int = MAX_SONGS_PER_ARTIST_PER_MEMBER,
) -> List[MemberSongSet]:
    """Fetch and filter top songs for all members, in member order."""
    if not members:
        return []

    log_step(f"Fetching top songs for {len(members)} members...")
    with ThreadPoolExecutor(max_workers=min(FETCH_MAX_WORKERS, len(members))) as executor:
        futures = [
            executor.submit(
                _fetch_top_songs, catalog, member, history, market, max_per_artist
            )
            for member in members
        ]
        return [f.result() for f in futures]


def get_liked_songs_if_necessary(
    catalog: SpotifyCatalog,
    song_set: MemberSongSet,
    quota: int,
    history: AbstractSet[str],
    market: str = AVAILABLE_MARKET,
    max_per_artist: int = MAX_SONGS_PER_ARTIST_PER_MEMBER,
) -> MemberSongSet:
    """
    Append liked songs to `song_set` until it holds `quota` songs.

    The quota is checked before every page, and another page is only
    requested when the previous one returned a `next` cursor. A failed
    page keeps whatever was gathered so far.
    """
    member = song_set.member
    page_url: Optional[str] = None

    while song_set.total < quota:
        try:
            page = catalog.get_liked_tracks(member, page_url)
        except Exception as exc:  # noqa: BLE001
            log_warning(f"Unable to get liked songs for {member.spotify_id}: {exc}")
            break

        filtered = filter_member_tracks(page.items, history, market, max_per_artist)
        song_set.liked_tracks.extend(_curate(filtered, member))

        if not page.next:
            break
        page_url = page.next

    return song_set


def gather_member_songs(
    catalog: SpotifyCatalog,
    members: Sequence[Member],
    quota: int,
    history: AbstractSet[str],
    market: str = AVAILABLE_MARKET,
    max_per_artist: int = MAX_SONGS_PER_ARTIST_PER_MEMBER,
) -> List[MemberSongSet]:
    """
    Top songs for everyone, then liked songs where a member falls short.

    Top songs picked in this refresh are added to a local copy of the
    history so liked songs cannot bring them back for another member.
    The caller's history is left untouched.
    """
    song_sets = get_top_songs(catalog, members, history, market, max_per_artist)

    refresh_history: Set[str] = set(history)
    for song_set in song_sets:
        refresh_history.update(song.uri for song in song_set.top_tracks)

    short = sum(1 for s in song_sets if s.total < quota)
    if short:
        log_step(f"Fetching liked songs for {short} members below quota...")

    with ThreadPoolExecutor(max_workers=min(FETCH_MAX_WORKERS, max(len(song_sets), 1))) as executor:
        futures = [
            executor.submit(
                get_liked_songs_if_necessary,
                catalog,
                song_set,
                quota,
                refresh_history,
                market,
                max_per_artist,
            )
            for song_set in song_sets
        ]
        return [f.result() for f in futures]


def get_all_music(
    catalog: SpotifyCatalog,
    members: Sequence[Member],
    quota: int,
    history: AbstractSet[str],
) -> List[CuratedTrack]:
    """Gather every member's songs and merge them into the candidate list."""
    song_sets = gather_member_songs(catalog, members, quota, history)
    return generate_playlist(song_sets, quota)
