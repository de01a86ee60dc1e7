import logging

# Project logger (tuned via logging_config)
logger = logging.getLogger("playlist_remix")


def log_section(title: str) -> None:
    """
    Log a top-level section header, e.g. the start of a refresh.
    """
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_debug(message: str) -> None:
    """
    Chatty bookkeeping (queue table changes, page cursors).
    """
    logger.debug("%s", message)


def log_step(message: str) -> None:
    """
    Action step / ongoing work.
    """
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """
    Non-fatal problem: the refresh keeps going.
    """
    logger.warning("⚠️ %s", message)


def log_error(message: str, exc_info: bool = False) -> None:
    """
    Error that ends the current operation.
    """
    logger.error("❌ %s", message, exc_info=exc_info)
