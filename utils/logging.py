"""Logging setup and structured event helper.

Events are emitted as ``event_name: key=value ...`` so they can be grepped.
Log ids and lengths only, never post text or bearer tokens.
"""

import logging
import sys

from context import request_context

EVENT_APP_START = "app_start"
EVENT_POST_CREATED = "post_created"
EVENT_POST_DELETED = "post_deleted"
EVENT_POST_LIKED = "post_liked"
EVENT_POST_UNLIKED = "post_unliked"
EVENT_COMMENT_ADDED = "comment_added"
EVENT_COMMENT_REMOVED = "comment_removed"
EVENT_PROFILE_SAVED = "profile_saved"
EVENT_EDUCATION_ADDED = "education_added"
EVENT_EDUCATION_REMOVED = "education_removed"
EVENT_AUTH_FAILED = "auth_failed"
EVENT_REQUEST_REJECTED = "request_rejected"
EVENT_DB_READ_FAILED = "db_read_failed"
EVENT_UNKNOWN_ERROR = "unknown_error"

_HANDLER_ATTR = "_posts_api"


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a stdout handler to the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level)

    for h in root.handlers:
        if getattr(h, _HANDLER_ATTR, False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def log_event(logger: logging.Logger, level: str, event_name: str, **kwargs) -> None:
    """
    Emit ``event_name: k=v ...`` at the given level

    When called while a request is being handled, its method and path are
    prepended to the fields.

    Args:
        logger: logger of the calling module
        level: "info", "warning", "error" or "exception"
        event_name: one of the EVENT_* names
        **kwargs: fields appended as key=value
    """
    request = request_context.get()
    if request is not None:
        kwargs = {"method": request.method, "path": request.url.path, **kwargs}

    parts = " ".join(f"{k}={v}" for k, v in kwargs.items())
    message = f"{event_name}: {parts}" if parts else event_name
    log_fn = getattr(logger, level, logger.info)
    log_fn(message)
