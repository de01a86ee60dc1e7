from typing import Dict, List, Optional

from pydantic import BaseModel


class RefreshedTrack(BaseModel):
    uri: str
    name: str
    artists: List[str]
    owner_id: str


class RefreshResponse(BaseModel):
    playlist_id: str
    status: str = "done"
    tracks_count: int
    tracks: List[RefreshedTrack]
    notified: bool = False


class PlaylistOverviewResponse(BaseModel):
    owned_playlists: List[Dict]
    orphan_playlists: List[str]
    subscribed_playlists: List[Dict]


class SubscribeResponse(BaseModel):
    playlist_id: str
    subscribed: bool
    member_count: Optional[int] = None


class RemovePlaylistsRequest(BaseModel):
    playlists: List[str]


class RemovePlaylistsResponse(BaseModel):
    deleted: List[str]


class QueueStateResponse(BaseModel):
    keys: List[str]
    pending: Dict[str, int]
