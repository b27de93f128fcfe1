"""
Tests for the bootstrap and add-from-TMDb flows.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from filmoteca.core.config import DEFAULT_MOVIE_IDS, Settings
from filmoteca.core.models.enums import AddOutcome
from filmoteca.core.state import CollectionState
from filmoteca.core.store import LocalStorage, MovieStore
from filmoteca.services import movies as movie_service
from sample_data import make_movie


class ServiceTestCase(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.store = MovieStore(LocalStorage(Path(tmp.name) / "storage.json"))
        self.state = CollectionState(self.store)

        self.failing_ids = set()
        self.fetch = AsyncMock(side_effect=self._fetch)
        for target, value in (
            ("filmoteca.services.movies.fetch_complete_movie", self.fetch),
            ("filmoteca.services.movies.get_settings", lambda: Settings()),
        ):
            patcher = patch(target, value)
            patcher.start()
            self.addCleanup(patcher.stop)

    async def _fetch(self, tmdb_id):
        if tmdb_id in self.failing_ids:
            return None
        return make_movie(tmdb_id, title=f"Title {tmdb_id}")


class TestFetchMovies(ServiceTestCase):

    async def test_keeps_request_order(self):
        movies = await movie_service.fetch_movies([3, 1, 2])
        self.assertEqual([m.id for m in movies], [3, 1, 2])

    async def test_drops_failures_and_exceptions(self):
        self.failing_ids = {1}

        async def flaky(tmdb_id):
            if tmdb_id == 2:
                raise RuntimeError("unexpected")
            return await self._fetch(tmdb_id)

        self.fetch.side_effect = flaky
        movies = await movie_service.fetch_movies([1, 2, 3])
        self.assertEqual([m.id for m in movies], [3])


class TestResetMovies(ServiceTestCase):

    async def test_bootstrap_all_defaults(self):
        movies = await movie_service.reset_movies(self.state)
        self.assertEqual([m.id for m in movies], DEFAULT_MOVIE_IDS)
        self.assertEqual(self.store.load(), movies)

    async def test_bootstrap_with_two_failures(self):
        self.failing_ids = {122, 497}
        movies = await movie_service.reset_movies(self.state)
        expected = [i for i in DEFAULT_MOVIE_IDS if i not in self.failing_ids]
        self.assertEqual(len(movies), 8)
        self.assertEqual([m.id for m in movies], expected)
        self.assertEqual([m.id for m in self.state.movies], expected)
        self.assertEqual([m.id for m in self.store.load()], expected)

    async def test_bootstrap_replaces_existing_collection(self):
        self.state.add(make_movie(1))
        await movie_service.reset_movies(self.state)
        self.assertFalse(self.state.exists(1))

    async def test_bootstrap_with_everything_failing(self):
        self.failing_ids = set(DEFAULT_MOVIE_IDS)
        self.assertEqual(await movie_service.reset_movies(self.state), [])
        self.assertEqual(self.store.load(), [])


class TestAddMovieFromTMDb(ServiceTestCase):

    async def test_add(self):
        result = await movie_service.add_movie_from_tmdb(self.state, 680)
        self.assertIs(result.outcome, AddOutcome.ADDED)
        self.assertEqual(result.movie.id, 680)
        self.assertTrue(self.state.exists(680))
        self.assertEqual([m.id for m in self.store.load()], [680])

    async def test_second_add_is_rejected(self):
        await movie_service.add_movie_from_tmdb(self.state, 680)
        result = await movie_service.add_movie_from_tmdb(self.state, 680)
        self.assertIs(result.outcome, AddOutcome.DUPLICATE)
        self.assertEqual(len(self.state), 1)
        self.assertEqual([m.id for m in self.store.load()], [680])
        # rejected before any lookup
        self.fetch.assert_awaited_once_with(680)

    async def test_lookup_failure_leaves_collection_untouched(self):
        self.state.add(make_movie(13))
        self.failing_ids = {680}
        result = await movie_service.add_movie_from_tmdb(self.state, 680)
        self.assertIs(result.outcome, AddOutcome.NOT_FOUND)
        self.assertIsNone(result.movie)
        self.assertEqual([m.id for m in self.state.movies], [13])


if __name__ == '__main__':
    unittest.main()
