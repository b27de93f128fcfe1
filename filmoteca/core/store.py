# filmoteca/core/store.py
"""Storage layer: a file-backed key/value document and the movie list kept in it."""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from filmoteca.core.logger import setup_logger
from filmoteca.core.models.movie import Movie

logger = setup_logger(__name__)

STORAGE_KEY = "filmoteca::movies"
LOG_TAG = "[STORE]"

_movie_list = TypeAdapter(List[Movie])


class LocalStorage:
    """
    Key/value strings persisted as one JSON object on disk.

    Every write rewrites the whole document through a temporary file and
    os.replace, so readers never see a half-written file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("%s Unreadable storage at %s: %s", LOG_TAG, self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s Storage at %s is not an object, ignoring", LOG_TAG, self.path)
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class MovieStore:
    """Loads, saves and clears the whole movie list under a single key."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> List[Movie]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            return _movie_list.validate_json(raw)
        except ValidationError as e:
            logger.warning("%s Could not decode stored movies, starting empty: %s", LOG_TAG, e)
            return []

    def save(self, movies: Sequence[Movie]) -> None:
        payload = _movie_list.dump_json(list(movies), by_alias=True).decode("utf-8")
        self.storage.set_item(self.key, payload)
        logger.debug("%s Saved %d movies", LOG_TAG, len(movies))

    def clear(self) -> None:
        self.storage.remove_item(self.key)
        logger.info("%s Collection cleared", LOG_TAG)
