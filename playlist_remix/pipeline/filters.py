"""Track filters applied to every batch fetched for a member.

Each filter keeps a subset of its input in the original order. The
production chain is: history exclusion -> market -> per-artist cap.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional, Sequence

from playlist_remix.config import AVAILABLE_MARKET, MAX_SONGS_PER_ARTIST_PER_MEMBER
from playlist_remix.core import Track


@dataclass
class ArtistTally:
    """Running song count per artist id across one filtered batch."""

    counts: Dict[str, int] = field(default_factory=dict)

    def add(self, artist_id: str) -> int:
        self.counts[artist_id] = self.counts.get(artist_id, 0) + 1
        return self.counts[artist_id]


def exclude_history(tracks: Sequence[Track], history: AbstractSet[str]) -> List[Track]:
    return [t for t in tracks if t.uri not in history]


def filter_by_market(
    tracks: Sequence[Track],
    market: str = AVAILABLE_MARKET,
) -> List[Track]:
    """Keep tracks playable in `market`."""
    return [t for t in tracks if market in t.available_markets]


def cap_songs_per_artist(
    tracks: Sequence[Track],
    max_per_artist: int = MAX_SONGS_PER_ARTIST_PER_MEMBER,
    tally: Optional[ArtistTally] = None,
) -> List[Track]:
    """
    Drop a track as soon as one of its artists goes over `max_per_artist`.

    Every artist of a track is counted, even when the track ends up
    dropped because of another artist. Counts accumulate in `tally`, so
    passing the same tally to several calls shares the cap between them.
    """
    if tally is None:
        tally = ArtistTally()

    kept: List[Track] = []
    for track in tracks:
        over_cap = False
        for artist_id in track.artist_ids:
            if tally.add(artist_id) > max_per_artist:
                over_cap = True
        if not over_cap:
            kept.append(track)
    return kept


def filter_member_tracks(
    tracks: Sequence[Track],
    history: AbstractSet[str],
    market: str = AVAILABLE_MARKET,
    max_per_artist: int = MAX_SONGS_PER_ARTIST_PER_MEMBER,
) -> List[Track]:
    """Full chain for one fetch of one member's tracks (fresh artist tally)."""
    filtered = exclude_history(tracks, history)
    filtered = filter_by_market(filtered, market)
    return cap_songs_per_artist(filtered, max_per_artist, ArtistTally())
