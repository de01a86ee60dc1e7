from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException

from playlist_remix.core import (
    MemberNotFound,
    PersistenceError,
    PlaylistHasNoMembers,
    PlaylistNotFound,
    RefreshResult,
    SpotifyApiError,
)
from playlist_remix.data import JsonPlaylistStore
from playlist_remix.pipeline import (
    PlaylistRefresher,
    create_member_playlist,
    get_member_playlists,
    remove_playlists,
    subscribe_to_playlist,
)
from playlist_remix.spotify import SpotifyCatalog

from .deps import get_access_token, get_catalog, get_refresher, get_store
from .schemas import (
    PlaylistOverviewResponse,
    RefreshedTrack,
    RefreshResponse,
    RemovePlaylistsRequest,
    RemovePlaylistsResponse,
    SubscribeResponse,
)

router = APIRouter()


def _to_response(result: RefreshResult) -> RefreshResponse:
    tracks: List[RefreshedTrack] = [
        RefreshedTrack(
            uri=song.uri,
            name=song.track.name,
            artists=[a.name for a in song.track.artists],
            owner_id=song.owner_id,
        )
        for song in result.tracks
    ]
    return RefreshResponse(
        playlist_id=result.playlist_id,
        tracks_count=len(tracks),
        tracks=tracks,
        notified=result.notification is not None,
    )


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, (PlaylistNotFound, MemberNotFound)):
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    if isinstance(exc, PlaylistHasNoMembers):
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    if isinstance(exc, (PersistenceError, SpotifyApiError)):
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    raise exc


@router.post("/{playlist_id}/refresh", response_model=RefreshResponse)
def refresh_playlist(
    playlist_id: str,
    refresher: PlaylistRefresher = Depends(get_refresher),
) -> RefreshResponse:
    """
    Regenerate a playlist. Blocks until earlier refreshes of the same
    playlist have finished and this one is done.
    """
    try:
        result = refresher.refresh(playlist_id)
    except Exception as exc:  # noqa: BLE001
        _raise_http(exc)
    return _to_response(result)


@router.post("", response_model=RefreshResponse)
def create_playlist(
    access_token: str = Depends(get_access_token),
    store: JsonPlaylistStore = Depends(get_store),
    catalog: SpotifyCatalog = Depends(get_catalog),
    refresher: PlaylistRefresher = Depends(get_refresher),
) -> RefreshResponse:
    try:
        result = create_member_playlist(store, catalog, refresher, access_token)
    except Exception as exc:  # noqa: BLE001
        _raise_http(exc)
    return _to_response(result)


@router.get("", response_model=PlaylistOverviewResponse)
def list_playlists(
    access_token: str = Depends(get_access_token),
    store: JsonPlaylistStore = Depends(get_store),
    catalog: SpotifyCatalog = Depends(get_catalog),
) -> PlaylistOverviewResponse:
    try:
        overview = get_member_playlists(store, catalog, access_token)
    except Exception as exc:  # noqa: BLE001
        _raise_http(exc)
    return PlaylistOverviewResponse(
        owned_playlists=overview.owned,
        orphan_playlists=overview.orphan,
        subscribed_playlists=overview.subscribed,
    )


@router.post("/{playlist_id}/subscribe", response_model=SubscribeResponse)
def subscribe(
    playlist_id: str,
    access_token: str = Depends(get_access_token),
    store: JsonPlaylistStore = Depends(get_store),
    catalog: SpotifyCatalog = Depends(get_catalog),
) -> SubscribeResponse:
    try:
        playlist = subscribe_to_playlist(store, catalog, access_token, playlist_id)
    except Exception as exc:  # noqa: BLE001
        _raise_http(exc)
    if playlist is None:
        return SubscribeResponse(playlist_id=playlist_id, subscribed=False)
    return SubscribeResponse(
        playlist_id=playlist_id,
        subscribed=True,
        member_count=len(playlist.members),
    )


@router.delete("", response_model=RemovePlaylistsResponse)
def delete_playlists(
    body: RemovePlaylistsRequest,
    access_token: str = Depends(get_access_token),
    store: JsonPlaylistStore = Depends(get_store),
) -> RemovePlaylistsResponse:
    try:
        deleted = remove_playlists(store, access_token, body.playlists)
    except Exception as exc:  # noqa: BLE001
        _raise_http(exc)
    return RemovePlaylistsResponse(deleted=deleted)

