from fastapi import Header, HTTPException, Request

from playlist_remix.data import JsonPlaylistStore
from playlist_remix.pipeline import KeyedSerialQueue, PlaylistRefresher
from playlist_remix.spotify import SpotifyCatalog


def get_refresher(request: Request) -> PlaylistRefresher:
    return request.app.state.refresher


def get_store(request: Request) -> JsonPlaylistStore:
    return request.app.state.store


def get_catalog(request: Request) -> SpotifyCatalog:
    return request.app.state.catalog


def get_queue(request: Request) -> KeyedSerialQueue:
    return request.app.state.queue


def get_access_token(authorization: str = Header(default="")) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Missing bearer token.")
    return token.strip()
