# filmoteca/main.py

from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, APIRouter
from fastapi.staticfiles import StaticFiles

from filmoteca.api.routers import logs, movies, tmdb
from filmoteca.web_ui.routes import router as ui_router
from filmoteca.core.config import get_settings
from filmoteca.core.httpclient import tmdb_client
from filmoteca.core.logger import setup_logger
from filmoteca.core.state import CollectionState
from filmoteca.core.store import LocalStorage, MovieStore

# Prime the app logger
logger = setup_logger(__name__, get_settings().log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Load the persisted collection unless one was installed beforehand
    if getattr(app.state, "collection", None) is None:
        storage = LocalStorage(settings.storage_file)
        app.state.collection = CollectionState(MovieStore(storage))
    if not settings.tmdb_token:
        logger.warning("No TMDb token configured; catalog lookups will return nothing")
    logger.info("Filmoteca started!")

    try:
        yield
    finally:
        await tmdb_client.aclose()


app = FastAPI(title="Filmoteca", lifespan=lifespan)

# Web UI
app.include_router(ui_router)

# API v1 routers
api_v1 = APIRouter(prefix="/api/v1", tags=["API"])
api_v1.include_router(movies.router, prefix="/movies")
api_v1.include_router(tmdb.router,   prefix="/tmdb")
api_v1.include_router(logs.router,   prefix="/logs")
app.include_router(api_v1)

# Static files for the UI
STATIC_DIR = Path(__file__).parent / "web_ui" / "static"
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


def run() -> None:
    settings = get_settings()
    uvicorn.run("filmoteca.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
