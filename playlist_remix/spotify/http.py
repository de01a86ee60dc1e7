from typing import Any, Dict

import requests

from playlist_remix.config import SPOTIFY_API_BASE
from playlist_remix.core import SpotifyApiError


def spotify_headers(access_token: str) -> Dict:
    return {"Authorization": f"Bearer {access_token}"}


def spotify_url(path: str) -> str:
    if path.startswith("http"):
        return path
    return f"{SPOTIFY_API_BASE}{path}"


def spotify_request(
    method: str,
    path: str,
    access_token: str,
    **kwargs: Any,
) -> Dict:
    """
    Call the Spotify Web API and return the decoded JSON body.

    `path` may be an absolute `next` URL returned by a previous page.
    Any transport error or non-2xx status is raised as SpotifyApiError;
    no retry is attempted here.
    """
    url = spotify_url(path)
    try:
        r = requests.request(
            method,
            url,
            headers=spotify_headers(access_token),
            **kwargs,
        )
        r.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise SpotifyApiError(f"{method} {url} failed: {e}", status_code=status) from e
    except requests.RequestException as e:
        raise SpotifyApiError(f"{method} {url} failed: {e}") from e

    if not r.content:
        return {}
    return r.json()
