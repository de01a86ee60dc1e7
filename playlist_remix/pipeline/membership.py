"""Playlist membership helpers: overview, subscribe, remove, create."""

from typing import Dict, List, Optional, Sequence

from playlist_remix.core import (
    Member,
    MemberNotFound,
    Playlist,
    PlaylistNotFound,
    PlaylistOverview,
    RefreshResult,
    log_info,
    log_step,
)
from playlist_remix.data import JsonPlaylistStore
from playlist_remix.spotify import SpotifyCatalog

from .orchestration import PlaylistRefresher


def _require_member(store: JsonPlaylistStore, access_token: str) -> Member:
    member = store.get_member_by_token(access_token)
    if member is None:
        raise MemberNotFound("Unable to find member for the given access token")
    return member


def get_member_playlists(
    store: JsonPlaylistStore,
    catalog: SpotifyCatalog,
    access_token: str,
) -> PlaylistOverview:
    """
    Split the member's Spotify playlists into owned / orphan / subscribed.

    An unknown member or an empty Spotify answer gives an empty overview.
    """
    member = store.get_member_by_token(access_token)
    spotify_playlists: List[Dict] = catalog.get_user_playlists(access_token)
    if member is None or not spotify_playlists:
        return PlaylistOverview()

    created = store.owned_playlists(member.id)
    joined = [pid for pid in store.member_playlists(member.id) if pid not in created]
    spotify_ids = {p.get("id") for p in spotify_playlists}

    return PlaylistOverview(
        owned=[p for p in spotify_playlists if p.get("id") in created],
        orphan=[pid for pid in created if pid not in spotify_ids],
        subscribed=[p for p in spotify_playlists if p.get("id") in joined],
    )


def subscribe_to_playlist(
    store: JsonPlaylistStore,
    catalog: SpotifyCatalog,
    access_token: str,
    playlist_id: str,
) -> Optional[Playlist]:
    """
    Follow the playlist on Spotify and record the membership.

    Returns None when the member already belongs to the playlist.
    """
    member = _require_member(store, access_token)
    playlist = store.get_playlist(playlist_id)
    if playlist is None:
        raise PlaylistNotFound(playlist_id)

    if any(m.id == member.id for m in playlist.members):
        log_info(f"{member.spotify_id} is already a member of {playlist_id}.")
        return None

    catalog.follow_playlist(access_token, playlist_id)
    return store.add_member(playlist_id, member)


def remove_playlists(
    store: JsonPlaylistStore,
    access_token: str,
    playlist_ids: Sequence[str],
) -> List[str]:
    """Delete the given playlists the member owns; raises if none match."""
    member = _require_member(store, access_token)
    owned = set(store.owned_playlists(member.id))
    to_delete = [pid for pid in playlist_ids if pid in owned]
    if not to_delete:
        raise PlaylistNotFound(", ".join(playlist_ids))
    return store.delete_playlists(to_delete)


def create_member_playlist(
    store: JsonPlaylistStore,
    catalog: SpotifyCatalog,
    refresher: PlaylistRefresher,
    access_token: str,
) -> RefreshResult:
    """Create a Spotify playlist for the member, record it, then fill it."""
    member = _require_member(store, access_token)
    log_step(f"Creating playlist for {member.spotify_id}...")
    created = catalog.create_playlist(member)
    saved = store.create_playlist(member, created["id"])
    return refresher.refresh(saved.playlist_id, is_new=True)
