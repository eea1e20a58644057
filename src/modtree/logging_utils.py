"""
Logging utilities for collecting tree events on a queue.

Trees are usually driven from several worker threads; attaching one
TreeEventHandler to the ``modtree`` logger funnels every insert, removal
and rejection into a single queue the caller can drain.
"""
from __future__ import annotations

import logging
from queue import Empty, Queue
from typing import List, Optional, Tuple

PACKAGE_LOGGER = "modtree"


class TreeEventHandler(logging.Handler):
    """
    A logging handler that sends (levelname, message) tuples to a queue.
    """

    def __init__(self, event_queue: Queue, level: int = logging.DEBUG):
        super().__init__(level)
        self.event_queue = event_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.event_queue.put((record.levelname, self.format(record)))
        except Exception:
            self.handleError(record)


def attach_event_handler(
    event_queue: Queue,
    level: int = logging.DEBUG,
    logger_name: str = PACKAGE_LOGGER,
) -> TreeEventHandler:
    """
    Attach a TreeEventHandler to the package logger.

    Lowers the logger's own level to ``level`` if it is currently higher,
    so debug events reach the handler.

    Args:
        event_queue: Queue to send events to.
        level: Minimum level forwarded.
        logger_name: Logger to attach to. Defaults to the package logger.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(logger_name)
    handler = TreeEventHandler(event_queue, level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler


def detach_event_handler(handler: TreeEventHandler, logger_name: str = PACKAGE_LOGGER) -> None:
    """Remove a TreeEventHandler from the logger it was attached to."""
    logging.getLogger(logger_name).removeHandler(handler)


def drain_events(event_queue: Queue, limit: Optional[int] = None) -> List[Tuple[str, str]]:
    """
    Pop queued events without blocking.

    Args:
        event_queue: Queue filled by a TreeEventHandler.
        limit: Stop after this many events (None = all available).
    """
    events: List[Tuple[str, str]] = []
    while limit is None or len(events) < limit:
        try:
            events.append(event_queue.get_nowait())
        except Empty:
            break
    return events
