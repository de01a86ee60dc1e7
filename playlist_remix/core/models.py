from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class Member:
    """
    A playlist member as known to the store.

    - id           : store identifier, also used as the owner tag of tracks
    - spotify_id   : Spotify user id
    - access_token : OAuth access token used for every catalog call
    """

    id: str
    spotify_id: str
    access_token: str


@dataclass(frozen=True)
class Artist:
    id: str
    name: str = ""


@dataclass(frozen=True)
class Track:
    uri: str
    name: str = ""
    artists: Tuple[Artist, ...] = ()
    available_markets: FrozenSet[str] = frozenset()

    @property
    def artist_ids(self) -> List[str]:
        return [a.id for a in self.artists]


@dataclass(frozen=True)
class CuratedTrack:
    """A Track picked for a member; owner_id drives interleaving."""

    track: Track
    owner_id: str

    @property
    def uri(self) -> str:
        return self.track.uri


@dataclass
class TrackPage:
    items: List[Track]
    next: Optional[str] = None


@dataclass
class MemberSongSet:
    """
    Songs gathered for one member during one refresh.

    top_tracks is filled once; liked_tracks only grows while paginating.
    """

    member: Member
    top_tracks: List[CuratedTrack] = field(default_factory=list)
    liked_tracks: List[CuratedTrack] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.top_tracks) + len(self.liked_tracks)


@dataclass
class Playlist:
    playlist_id: str
    owner: Member
    members: List[Member] = field(default_factory=list)
    history: List[str] = field(default_factory=list)


@dataclass
class RefreshResult:
    playlist_id: str
    tracks: List[CuratedTrack]
    notification: Optional[Dict[str, Any]] = None


@dataclass
class PlaylistOverview:
    """
    Playlists of a member, split against what Spotify reports.

    - owned      : playlists the member created that still exist on Spotify
    - orphan     : ids the member created that Spotify no longer returns
    - subscribed : playlists the member joined without owning them
    """

    owned: List[Dict[str, Any]] = field(default_factory=list)
    orphan: List[str] = field(default_factory=list)
    subscribed: List[Dict[str, Any]] = field(default_factory=list)
