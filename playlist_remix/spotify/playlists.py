from typing import Dict, List, Sequence

from playlist_remix.config import (
    PAGE_LIMIT,
    PLAYLIST_BATCH_SIZE,
    PLAYLIST_DESCRIPTION,
    PLAYLIST_NAME,
)
from playlist_remix.core import Member, log_info

from .http import spotify_request


def get_playlist_tracks(playlist_id: str, access_token: str) -> List[str]:
    """
    Return the URIs currently in a playlist, following every page.
    """
    path = f"/playlists/{playlist_id}/tracks"
    params = {"fields": "items(track(uri)),next", "limit": PLAYLIST_BATCH_SIZE}
    uris: List[str] = []

    while path:
        data = spotify_request("GET", path, access_token, params=params)
        for item in data.get("items", []):
            track = item.get("track")
            if track and track.get("uri"):
                uris.append(track["uri"])
        path = data.get("next")
        params = None  # next URL already includes params

    return uris


def remove_playlist_tracks(
    playlist_id: str,
    access_token: str,
    uris: Sequence[str],
) -> None:
    """
    Remove one batch of tracks. Spotify accepts at most 100 per call;
    callers split larger sets themselves.
    """
    if len(uris) > PLAYLIST_BATCH_SIZE:
        raise ValueError(
            f"Cannot remove {len(uris)} tracks in one call "
            f"(max {PLAYLIST_BATCH_SIZE})."
        )
    if not uris:
        return
    body = {"tracks": [{"uri": u} for u in uris]}
    spotify_request("DELETE", f"/playlists/{playlist_id}/tracks", access_token, json=body)


def add_tracks_to_playlist(
    access_token: str,
    playlist_id: str,
    uris: Sequence[str],
) -> None:
    """Append tracks in order, 100 per call."""
    path = f"/playlists/{playlist_id}/tracks"
    for i in range(0, len(uris), PLAYLIST_BATCH_SIZE):
        batch = list(uris[i : i + PLAYLIST_BATCH_SIZE])
        spotify_request("POST", path, access_token, json={"uris": batch})


def get_user_playlists(access_token: str) -> List[Dict]:
    playlists: List[Dict] = []
    path = "/me/playlists"
    params = {"limit": PAGE_LIMIT}

    while path:
        data = spotify_request("GET", path, access_token, params=params)
        playlists.extend(data.get("items", []))
        path = data.get("next")
        params = None

    log_info(f"{len(playlists)} playlists found.")
    return playlists


def create_playlist(member: Member, name: str = PLAYLIST_NAME) -> Dict:
    payload = {
        "name": name,
        "public": False,
        "collaborative": True,
        "description": PLAYLIST_DESCRIPTION,
    }
    playlist = spotify_request(
        "POST",
        f"/users/{member.spotify_id}/playlists",
        member.access_token,
        json=payload,
    )
    log_info(f"Playlist created for {member.spotify_id}: {playlist.get('id')}")
    return playlist


def follow_playlist(access_token: str, playlist_id: str) -> None:
    spotify_request(
        "PUT",
        f"/playlists/{playlist_id}/followers",
        access_token,
        json={"public": False},
    )
