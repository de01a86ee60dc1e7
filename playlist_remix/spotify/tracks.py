from typing import Dict, List, Optional

from playlist_remix.config import PAGE_LIMIT, TOP_TRACKS_TIME_RANGE
from playlist_remix.core import Artist, Member, Track, TrackPage, log_debug

from .http import spotify_request


def parse_track(t: Dict) -> Track:
    """Build a Track from a Spotify track object."""
    return Track(
        uri=t["uri"],
        name=t.get("name", ""),
        artists=tuple(
            Artist(id=a["id"], name=a.get("name", ""))
            for a in t.get("artists", [])
            if a.get("id")
        ),
        available_markets=frozenset(t.get("available_markets") or []),
    )


def get_top_tracks(member: Member) -> TrackPage:
    data = spotify_request(
        "GET",
        "/me/top/tracks",
        member.access_token,
        params={"limit": PAGE_LIMIT, "time_range": TOP_TRACKS_TIME_RANGE},
    )
    items = [parse_track(t) for t in data.get("items", []) if t and t.get("uri")]
    log_debug(f"{len(items)} top tracks fetched for {member.spotify_id}.")
    return TrackPage(items=items, next=data.get("next"))


def get_liked_tracks(member: Member, page_url: Optional[str] = None) -> TrackPage:
    """
    Fetch one page of the member's saved tracks.

    Pass the previous page's `next` URL to continue; it already carries
    the paging params.
    """
    if page_url:
        data = spotify_request("GET", page_url, member.access_token)
    else:
        data = spotify_request(
            "GET",
            "/me/tracks",
            member.access_token,
            params={"limit": PAGE_LIMIT},
        )

    items: List[Track] = []
    for item in data.get("items", []):
        t = item.get("track")
        if t and t.get("uri"):
            items.append(parse_track(t))

    log_debug(
        f"{len(items)} liked tracks fetched for {member.spotify_id} "
        f"(next={data.get('next')!r})."
    )
    return TrackPage(items=items, next=data.get("next"))
