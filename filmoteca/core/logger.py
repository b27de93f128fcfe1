# filmoteca/core/logger.py

import sys
import logging
import asyncio
from logging import Handler
from typing import Union

# ─── Custom Formatter ────────────────────────────────────────────────────────
class CategoryFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, "category"):
            record.category = record.name.rsplit(".", 1)[-1].upper()
        return super().format(record)

# shared formatter for queue & console
formatter = CategoryFormatter(
    fmt="%(asctime)s %(levelname)-8s [%(category)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

# ─── In‑memory queues ─────────────────────────────────────────────────────────
# one queue per connected log-stream client
log_listeners: list[asyncio.Queue[str]] = []

# ─── Queue‐based handler ────────────────────────────────────────────────────
class AsyncQueueHandler(Handler):
    """Broadcast formatted log records to every listener queue."""
    def emit(self, record: logging.LogRecord) -> None:
        if not log_listeners:
            return
        msg = self.format(record)
        for q in list(log_listeners):
            try:
                q.put_nowait(msg)
            except asyncio.QueueFull:
                # drop if listener is slow
                pass

# ─── Public API ───────────────────────────────────────────────────────────────
def setup_logger(name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    # Prevent duplicate logging by disabling propagation
    logger.propagate = False

    # Console → stdout
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    # In‑memory queue → for SSE
    qh = AsyncQueueHandler()
    qh.setLevel(level)
    qh.setFormatter(formatter)
    logger.addHandler(qh)

    return logger
