import logging
import sys
from typing import Optional, Union

from playlist_remix.config import LOG_LEVEL

# Third-party loggers that flood INFO with one line per HTTP call
_NOISY_LOGGERS = ("urllib3", "requests")


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Send log records to stdout.

    `level` defaults to REMIX_LOG_LEVEL. When handlers already exist
    (uvicorn installs its own), only the levels are updated.
    """
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO

    root = logging.getLogger()
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))

    if root.handlers:
        root.setLevel(resolved)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s %(threadName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(resolved)
