from typing import List, Sequence, Set

from playlist_remix.core import CuratedTrack, MemberSongSet, log_info


def generate_playlist(
    song_sets: Sequence[MemberSongSet],
    quota: int,
) -> List[CuratedTrack]:
    """
    Merge every member's songs into one candidate list.

    Each member gives up to `quota` top songs, topped up from the front of
    their liked songs when the top songs fall short. Members keep their
    iteration order.
    """
    playlist_songs: List[CuratedTrack] = []
    for song_set in song_sets:
        top = song_set.top_tracks[:quota]
        shortfall = max(quota - len(top), 0)
        liked = song_set.liked_tracks[:shortfall]
        log_info(
            f"Member {song_set.member.spotify_id}: "
            f"{len(top)} top songs, {len(liked)} liked songs."
        )
        playlist_songs.extend(top)
        playlist_songs.extend(liked)

    log_info(f"Candidate playlist has {len(playlist_songs)} songs.")
    return playlist_songs


def round_robin_sort(songs: Sequence[CuratedTrack]) -> List[CuratedTrack]:
    """
    Interleave songs one owner at a time.

    Each sweep walks the remaining songs left to right and takes the first
    one of every owner not yet picked in that sweep. Owners therefore keep
    their first-appearance order and each owner's songs keep their own
    order:

      owners A A C C B A  ->  A C B A C A
    """
    remaining = list(songs)
    ordered: List[CuratedTrack] = []

    while remaining:
        picked_owners: Set[str] = set()
        leftover: List[CuratedTrack] = []
        for song in remaining:
            if song.owner_id in picked_owners:
                leftover.append(song)
            else:
                picked_owners.add(song.owner_id)
                ordered.append(song)
        remaining = leftover

    return ordered
