from typing import Any, Dict, List, Optional, Sequence

import requests

from playlist_remix.config import SLACK_API_URL, SLACK_BOT_TOKEN
from playlist_remix.core import CuratedTrack, Member, NotificationError, log_error, log_step

REFRESHED_CONTEXT = (
    ":headbangingparrot: _The remix has been successfully refreshed_ "
    ":headbangingparrot:"
)


class SlackNotifier:
    """Posts refresh summaries to a Slack channel through chat.postMessage."""

    def __init__(
        self,
        token: Optional[str] = SLACK_BOT_TOKEN,
        api_url: str = SLACK_API_URL,
    ) -> None:
        self.token = token
        self.api_url = api_url

    def build_message(
        self,
        ordered: Sequence[CuratedTrack],
        members: Sequence[Member] = (),
    ) -> List[Dict[str, Any]]:
        """
        Build Block Kit blocks listing the playlist in its final order:

          1. <member spotify id> - Artist A, Artist B - Song
        """
        names = {m.id: m.spotify_id for m in members}
        lines = []
        for index, song in enumerate(ordered, start=1):
            owner = names.get(song.owner_id, song.owner_id)
            artists = ", ".join(a.name for a in song.track.artists)
            lines.append(f"{index}. {owner} - {artists} - {song.track.name}\n")

        return [
            {"type": "section", "text": {"type": "mrkdwn", "text": "".join(lines)}},
            {"type": "divider"},
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": REFRESHED_CONTEXT}],
            },
        ]

    def send_message(
        self,
        channel: str,
        text: str,
        blocks: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        post_request: Dict[str, Any] = {"channel": channel, "text": text}
        if blocks:
            post_request["blocks"] = blocks

        log_step(f"Sending Slack message to {channel}")
        try:
            r = requests.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.token}"},
                json=post_request,
            )
            r.raise_for_status()
            result = r.json()
        except (requests.RequestException, ValueError) as e:
            log_error(f"Slack message to {channel} failed: {e}")
            raise NotificationError(str(e)) from e

        # Slack answers 200 with ok=false for API-level errors.
        if not result.get("ok", False):
            log_error(f"Slack rejected message to {channel}: {result.get('error')}")
            raise NotificationError(result.get("error") or "unknown Slack error")

        return result
