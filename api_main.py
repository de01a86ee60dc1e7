from playlist_remix.api.fastapi_app import app

__all__ = ["app"]
