from typing import Optional


class RemixError(Exception):
    """Base class for errors raised by playlist_remix."""


class SourceFetchError(RemixError):
    """Top or liked songs could not be fetched for a member."""


class SpotifyApiError(SourceFetchError):
    """A Spotify Web API call failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PlaylistNotFound(RemixError):
    def __init__(self, playlist_id: str) -> None:
        super().__init__(f"Unable to find playlist with id {playlist_id}")
        self.playlist_id = playlist_id


class MemberNotFound(RemixError):
    pass


class PlaylistHasNoMembers(RemixError):
    def __init__(self, playlist_id: str) -> None:
        super().__init__(f"Playlist {playlist_id} has no members to pull songs from")
        self.playlist_id = playlist_id


class PersistenceError(RemixError):
    """Writing the new track order back to Spotify or the store failed."""


class NotificationError(RemixError):
    pass
