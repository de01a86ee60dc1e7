from typing import Dict, Iterable, List, Optional, Sequence, Union

import pytest

from playlist_remix.core import Artist, CuratedTrack, Member, Track, TrackPage


def _make_track(
    uri: str,
    artists: Iterable[str] = ("artist-1",),
    markets: Iterable[str] = ("US",),
    name: Optional[str] = None,
) -> Track:
    return Track(
        uri=uri,
        name=name or f"Song {uri}",
        artists=tuple(Artist(id=a, name=f"Artist {a}") for a in artists),
        available_markets=frozenset(markets),
    )


def _make_member(member_id: str) -> Member:
    return Member(
        id=member_id,
        spotify_id=f"spotify-{member_id}",
        access_token=f"token-{member_id}",
    )


LikedPages = Union[Exception, Sequence[Union[Exception, Sequence[Track]]]]


class FakeCatalog:
    """
    In-memory stand-in for SpotifyCatalog.

    - top[member_id]   : list of tracks, or an exception to raise
    - liked[member_id] : list of pages (each a list of tracks or an
                         exception); page N links to page N + 1
    """

    def __init__(
        self,
        top: Optional[Dict[str, Union[Exception, List[Track]]]] = None,
        liked: Optional[Dict[str, LikedPages]] = None,
        playlist_tracks: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.top = top or {}
        self.liked = liked or {}
        self.playlist_tracks = playlist_tracks or {}
        self.calls: List[tuple] = []
        self.removed: List[List[str]] = []
        self.added: List[List[str]] = []
        self.add_error: Optional[Exception] = None
        self.user_playlists: Dict[str, List[Dict]] = {}
        self.followed: List[tuple] = []
        self.created: List[str] = []

    def get_top_tracks(self, member: Member) -> TrackPage:
        self.calls.append(("top", member.id))
        value = self.top.get(member.id, [])
        if isinstance(value, Exception):
            raise value
        return TrackPage(items=list(value))

    def get_liked_tracks(self, member: Member, page_url: Optional[str] = None) -> TrackPage:
        self.calls.append(("liked", member.id, page_url))
        pages = self.liked.get(member.id, [])
        if isinstance(pages, Exception):
            raise pages
        if not pages:
            return TrackPage(items=[])

        index = 0 if page_url is None else int(page_url.rsplit("-", 1)[1])
        page = pages[index]
        if isinstance(page, Exception):
            raise page
        next_url = f"{member.id}-page-{index + 1}" if index + 1 < len(pages) else None
        return TrackPage(items=list(page), next=next_url)

    def liked_calls(self, member_id: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == "liked" and c[1] == member_id]

    def get_playlist_tracks(self, playlist_id: str, access_token: str) -> List[str]:
        self.calls.append(("playlist_tracks", playlist_id, access_token))
        return list(self.playlist_tracks.get(playlist_id, []))

    def remove_tracks(self, playlist_id: str, access_token: str, uris: Sequence[str]) -> None:
        self.removed.append(list(uris))

    def add_tracks(
        self, access_token: str, playlist_id: str, ordered: Sequence[CuratedTrack]
    ) -> None:
        if self.add_error is not None:
            raise self.add_error
        self.added.append([t.uri for t in ordered])

    def get_user_playlists(self, access_token: str) -> List[Dict]:
        return list(self.user_playlists.get(access_token, []))

    def create_playlist(self, member: Member) -> Dict:
        playlist_id = f"created-{len(self.created) + 1}"
        self.created.append(playlist_id)
        return {"id": playlist_id}

    def follow_playlist(self, access_token: str, playlist_id: str) -> None:
        self.followed.append((access_token, playlist_id))


class FakeNotifier:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.sent: List[tuple] = []

    def build_message(self, ordered, members=()):
        return [{"type": "section", "text": {"type": "mrkdwn", "text": str(len(ordered))}}]

    def send_message(self, channel, text, blocks=None):
        if self.error is not None:
            raise self.error
        self.sent.append((channel, text, blocks))
        return {"ok": True}


@pytest.fixture
def make_track():
    return _make_track


@pytest.fixture
def make_member():
    return _make_member


@pytest.fixture
def fake_catalog_cls():
    return FakeCatalog


@pytest.fixture
def fake_notifier_cls():
    return FakeNotifier
