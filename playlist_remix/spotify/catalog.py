"""Object-style access to the Spotify catalog.

The pipeline talks to the catalog through an instance so that tests (and
other deployments) can hand in any object with the same methods.
"""

from typing import Dict, List, Optional, Sequence

from playlist_remix.core import CuratedTrack, Member, TrackPage

from . import playlists, tracks


class SpotifyCatalog:
    """Spotify Web API collaborator used by the refresh pipeline."""

    def get_top_tracks(self, member: Member) -> TrackPage:
        return tracks.get_top_tracks(member)

    def get_liked_tracks(
        self, member: Member, page_url: Optional[str] = None
    ) -> TrackPage:
        return tracks.get_liked_tracks(member, page_url)

    def get_playlist_tracks(self, playlist_id: str, access_token: str) -> List[str]:
        return playlists.get_playlist_tracks(playlist_id, access_token)

    def remove_tracks(
        self, playlist_id: str, access_token: str, uris: Sequence[str]
    ) -> None:
        playlists.remove_playlist_tracks(playlist_id, access_token, uris)

    def add_tracks(
        self,
        access_token: str,
        playlist_id: str,
        ordered: Sequence[CuratedTrack],
    ) -> None:
        playlists.add_tracks_to_playlist(
            access_token, playlist_id, [t.uri for t in ordered]
        )

    def get_user_playlists(self, access_token: str) -> List[Dict]:
        return playlists.get_user_playlists(access_token)

    def create_playlist(self, member: Member) -> Dict:
        return playlists.create_playlist(member)

    def follow_playlist(self, access_token: str, playlist_id: str) -> None:
        playlists.follow_playlist(access_token, playlist_id)
