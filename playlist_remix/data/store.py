"""JSON-backed store for members, playlists and playlist history.

Layout of the document on disk:

  {
    "members":   {"<member id>": {"id", "spotify_id", "access_token"}},
    "playlists": {"<playlist id>": {"playlist_id", "owner_id",
                                    "member_ids": [...], "history": [uri, ...]}}
  }

Every mutating call is a full read-modify-write cycle under a lock, and the
file is replaced atomically by write_json.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

from playlist_remix.config import STORE_FILE
from playlist_remix.core import (
    CuratedTrack,
    Member,
    MemberNotFound,
    Playlist,
    PlaylistNotFound,
    log_warning,
    read_json,
    write_json,
)


def _empty_document() -> Dict[str, Dict[str, Any]]:
    return {"members": {}, "playlists": {}}


def _member_from_dict(data: Dict[str, Any]) -> Member:
    return Member(
        id=data["id"],
        spotify_id=data["spotify_id"],
        access_token=data["access_token"],
    )


def _member_to_dict(member: Member) -> Dict[str, Any]:
    return {
        "id": member.id,
        "spotify_id": member.spotify_id,
        "access_token": member.access_token,
    }


class JsonPlaylistStore:
    """Playlist store used by the refresher and the membership helpers."""

    def __init__(self, path: str = STORE_FILE) -> None:
        self.path = path
        self._lock = threading.Lock()

    # ---------- raw document ----------

    def _load(self) -> Dict[str, Dict[str, Any]]:
        def _on_error(e: Exception) -> None:
            log_warning(f"Playlist store {self.path} is corrupted; starting empty.")

        data = read_json(self.path, default=None, on_error=_on_error)
        if not isinstance(data, dict):
            return _empty_document()
        data.setdefault("members", {})
        data.setdefault("playlists", {})
        return data

    def _save(self, data: Dict[str, Dict[str, Any]]) -> None:
        write_json(self.path, data)

    def _build_playlist(
        self,
        data: Dict[str, Dict[str, Any]],
        raw: Dict[str, Any],
        with_history: bool = True,
    ) -> Optional[Playlist]:
        members_raw = data["members"]
        owner_raw = members_raw.get(raw.get("owner_id"))
        if owner_raw is None:
            log_warning(f"Playlist {raw.get('playlist_id')} has an unknown owner.")
            return None

        members = [
            _member_from_dict(members_raw[mid])
            for mid in raw.get("member_ids", [])
            if mid in members_raw
        ]
        return Playlist(
            playlist_id=raw["playlist_id"],
            owner=_member_from_dict(owner_raw),
            members=members,
            history=list(raw.get("history", [])) if with_history else [],
        )

    # ---------- members ----------

    def save_member(self, member: Member) -> Member:
        with self._lock:
            data = self._load()
            data["members"][member.id] = _member_to_dict(member)
            self._save(data)
        return member

    def get_member(self, member_id: str) -> Optional[Member]:
        raw = self._load()["members"].get(member_id)
        return _member_from_dict(raw) if raw else None

    def get_member_by_token(self, access_token: str) -> Optional[Member]:
        for raw in self._load()["members"].values():
            if raw.get("access_token") == access_token:
                return _member_from_dict(raw)
        return None

    # ---------- playlists ----------

    def get_playlist(self, playlist_id: str, is_new: bool = False) -> Optional[Playlist]:
        """
        Load a playlist with its members and history.

        A playlist created a moment ago has never been refreshed, so
        is_new=True skips loading history.
        """
        data = self._load()
        raw = data["playlists"].get(playlist_id)
        if raw is None:
            return None
        return self._build_playlist(data, raw, with_history=not is_new)

    def create_playlist(self, owner: Member, playlist_id: str) -> Playlist:
        with self._lock:
            data = self._load()
            if owner.id not in data["members"]:
                raise MemberNotFound(f"Unknown member {owner.id}")
            data["playlists"][playlist_id] = {
                "playlist_id": playlist_id,
                "owner_id": owner.id,
                "member_ids": [owner.id],
                "history": [],
            }
            self._save(data)
        return Playlist(playlist_id=playlist_id, owner=owner, members=[owner])

    def add_member(self, playlist_id: str, member: Member) -> Playlist:
        with self._lock:
            data = self._load()
            raw = data["playlists"].get(playlist_id)
            if raw is None:
                raise PlaylistNotFound(playlist_id)
            data["members"].setdefault(member.id, _member_to_dict(member))
            if member.id not in raw["member_ids"]:
                raw["member_ids"].append(member.id)
            self._save(data)
            playlist = self._build_playlist(data, raw)
        if playlist is None:
            raise PlaylistNotFound(playlist_id)
        return playlist

    def owned_playlists(self, member_id: str) -> List[str]:
        return [
            pid
            for pid, raw in self._load()["playlists"].items()
            if raw.get("owner_id") == member_id
        ]

    def member_playlists(self, member_id: str) -> List[str]:
        return [
            pid
            for pid, raw in self._load()["playlists"].items()
            if member_id in raw.get("member_ids", [])
        ]

    def delete_playlists(self, playlist_ids: Iterable[str]) -> List[str]:
        deleted: List[str] = []
        with self._lock:
            data = self._load()
            for pid in playlist_ids:
                if data["playlists"].pop(pid, None) is not None:
                    deleted.append(pid)
            self._save(data)
        return deleted

    def save_tracks(self, playlist: Playlist, ordered: Sequence[CuratedTrack]) -> List[str]:
        """
        Record a refresh's tracks in the playlist history.

        History keeps first-use order and never holds a URI twice.
        Returns the updated history.
        """
        with self._lock:
            data = self._load()
            raw = data["playlists"].get(playlist.playlist_id)
            if raw is None:
                raise PlaylistNotFound(playlist.playlist_id)

            history: List[str] = list(raw.get("history", []))
            seen = set(history)
            for song in ordered:
                if song.uri not in seen:
                    seen.add(song.uri)
                    history.append(song.uri)

            raw["history"] = history
            self._save(data)
        return history
