"""Public façade for the playlist_remix.notify package."""

from .slack import SlackNotifier

__all__ = ["SlackNotifier"]
