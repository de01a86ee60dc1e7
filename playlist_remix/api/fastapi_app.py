from typing import Optional

from fastapi import FastAPI

from playlist_remix import __version__
from playlist_remix.api.playlists import router as playlists_router
from playlist_remix.api.queue import router as queue_router
from playlist_remix.core import configure_logging
from playlist_remix.data import JsonPlaylistStore
from playlist_remix.notify import SlackNotifier
from playlist_remix.pipeline import KeyedSerialQueue, PlaylistRefresher
from playlist_remix.spotify import SpotifyCatalog


def create_app(
    store: Optional[JsonPlaylistStore] = None,
    catalog: Optional[SpotifyCatalog] = None,
    notifier: Optional[SlackNotifier] = None,
) -> FastAPI:
    """
    Build the API with one refresher and one queue for the process lifetime.

    Collaborators default to the JSON store, the Spotify catalog and the
    Slack notifier configured from the environment.
    """
    configure_logging()

    app = FastAPI(
        title="Playlist Remix API",
        version=__version__,
        description="Shared playlists built from every member's top and liked songs.",
    )

    app.state.store = store or JsonPlaylistStore()
    app.state.catalog = catalog or SpotifyCatalog()
    app.state.queue = KeyedSerialQueue()
    app.state.refresher = PlaylistRefresher(
        queue=app.state.queue,
        store=app.state.store,
        catalog=app.state.catalog,
        notifier=notifier or SlackNotifier(),
    )

    app.include_router(playlists_router, prefix="/playlists", tags=["playlists"])
    app.include_router(queue_router, prefix="/queue", tags=["queue"])
    return app


app = create_app()
