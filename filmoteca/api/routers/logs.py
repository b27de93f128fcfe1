# filmoteca/api/routers/logs.py
import asyncio
import logging
import re

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from filmoteca.core.logger import log_listeners

router = APIRouter(tags=["logs"])
logger = logging.getLogger(__name__)

LEVEL_RE = re.compile(r"\b(DEBUG|INFO|WARNING|ERROR|CRITICAL)\b")
CATEGORY_RE = re.compile(r"\[(.*?)\]")


def line_matches(line: str, level: int, categories: set[str]) -> bool:
    """Level threshold and (optional) category filter for one formatted log line."""
    if m := LEVEL_RE.search(line):
        if logging.getLevelName(m.group(1)) < level:
            return False
    if categories:
        cat_match = CATEGORY_RE.search(line)
        if not cat_match:
            return False
        log_cat = cat_match.group(1).upper()
        return any(cat in log_cat for cat in categories)
    return True


@router.get("/stream", name="logs.stream_logs")
async def stream_logs(request: Request):
    """
    SSE endpoint: stream logs filtered by ?level=INFO and ?category=TMDB,STORE
    """
    level_str = request.query_params.get("level", "INFO").upper()
    raw_categories = request.query_params.get("category", "")
    categories = {c.strip().upper() for c in raw_categories.split(",") if c.strip()}
    level = logging.getLevelName(level_str)
    if not isinstance(level, int):
        level = logging.INFO

    logger.info("Client connected to SSE stream with level=%s and categories=%s", level_str, categories or "*")

    q: asyncio.Queue[str] = asyncio.Queue(maxsize=1000)
    log_listeners.append(q)

    async def event_generator():
        try:
            while True:
                line = await q.get()
                if line_matches(line, level, categories):
                    yield line
        except asyncio.CancelledError:
            logger.info("Client disconnected from SSE log stream")
            raise
        finally:
            log_listeners.remove(q)

    return EventSourceResponse(event_generator())
