"""
Unit tests for LocalStorage, MovieStore and CollectionState.
"""

import json
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from filmoteca.core.state import CollectionState
from filmoteca.core.store import STORAGE_KEY, LocalStorage, MovieStore
from sample_data import make_movie, sample_collection


class StoreTestCase(unittest.TestCase):

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "nested" / "storage.json"
        self.storage = LocalStorage(self.path)
        self.store = MovieStore(self.storage)


class TestLocalStorage(StoreTestCase):

    def test_missing_file_reads_empty(self):
        self.assertIsNone(self.storage.get_item("anything"))

    def test_set_get_remove(self):
        self.storage.set_item("a", "1")
        self.storage.set_item("b", "2")
        self.assertEqual(self.storage.get_item("a"), "1")
        self.storage.remove_item("a")
        self.assertIsNone(self.storage.get_item("a"))
        self.assertEqual(self.storage.get_item("b"), "2")

    def test_remove_missing_key(self):
        self.storage.remove_item("nope")
        self.assertFalse(self.path.exists())

    def test_corrupt_document_reads_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{definitely not json", encoding="utf-8")
        self.assertIsNone(self.storage.get_item(STORAGE_KEY))
        self.path.write_text("[1, 2, 3]", encoding="utf-8")
        self.assertIsNone(self.storage.get_item(STORAGE_KEY))

    def test_no_temp_files_left_behind(self):
        self.storage.set_item("a", "1")
        self.assertEqual(list(self.path.parent.iterdir()), [self.path])


class TestMovieStore(StoreTestCase):

    def test_load_without_data(self):
        self.assertEqual(self.store.load(), [])

    def test_round_trip(self):
        movies = sample_collection()
        self.store.load()
        self.store.save(movies)
        self.assertEqual(self.store.load(), movies)

    def test_round_trip_empty_list(self):
        self.store.save([])
        self.assertEqual(self.store.load(), [])
        self.assertEqual(self.storage.get_item(STORAGE_KEY), "[]")

    def test_clear_removes_key(self):
        self.store.save(sample_collection())
        self.store.clear()
        self.assertEqual(self.store.load(), [])
        self.assertIsNone(self.storage.get_item(STORAGE_KEY))

    def test_save_overwrites_whole_list(self):
        self.store.save(sample_collection())
        self.store.save([make_movie(1)])
        self.assertEqual([m.id for m in self.store.load()], [1])

    def test_undecodable_value_loads_empty(self):
        for raw in ("{oops", '{"id": 1}', '[{"title": "no id"}]', '[{"id": 1, "title": "x", "rating": 42}]'):
            with self.subTest(raw=raw):
                self.storage.set_item(STORAGE_KEY, raw)
                self.assertEqual(self.store.load(), [])

    def test_stored_with_camel_case_keys(self):
        self.store.save([make_movie(680, vote_average=8.4, poster_url="http://img/p.jpg")])
        stored = json.loads(self.storage.get_item(STORAGE_KEY))
        self.assertEqual(stored[0]["voteAverage"], 8.4)
        self.assertEqual(stored[0]["posterUrl"], "http://img/p.jpg")
        self.assertNotIn("vote_average", stored[0])

    def test_document_keeps_other_keys(self):
        self.storage.set_item("other", "value")
        self.store.save(sample_collection())
        self.store.clear()
        self.assertEqual(self.storage.get_item("other"), "value")


class TestCollectionState(StoreTestCase):

    def test_startup_saves_loaded_state(self):
        state = CollectionState(self.store)
        self.assertEqual(state.movies, [])
        self.assertEqual(self.storage.get_item(STORAGE_KEY), "[]")

    def test_loads_persisted_movies(self):
        self.store.save(sample_collection())
        state = CollectionState(self.store)
        self.assertEqual(len(state), 4)
        self.assertEqual(state.get(155).title, "The Dark Knight")
        self.assertIsNone(state.get(1))

    def test_every_mutation_is_persisted(self):
        state = CollectionState(self.store)
        state.add(make_movie(1))
        state.add(make_movie(2))
        self.assertEqual(self.store.load(), state.movies)
        state.update(1, {"title": "Renamed"})
        self.assertEqual(self.store.load()[0].title, "Renamed")
        state.rate(2, 9)
        self.assertEqual(self.store.load()[1].rating, 9)
        state.delete(1)
        self.assertEqual([m.id for m in self.store.load()], [2])
        state.replace(sample_collection())
        self.assertEqual(self.store.load(), sample_collection())

    def test_movies_is_a_copy(self):
        state = CollectionState(self.store)
        state.add(make_movie(1))
        state.movies.append(make_movie(2))
        self.assertEqual(len(state), 1)

    def test_clear(self):
        self.store.save(sample_collection())
        state = CollectionState(self.store)
        state.clear()
        self.assertEqual(state.movies, [])
        self.assertIsNone(self.storage.get_item(STORAGE_KEY))

    def test_rating_takes_display_precedence(self):
        state = CollectionState(self.store)
        state.add(make_movie(680, vote_average=8.4))
        self.assertEqual(state.get(680).score_text, "8.4")
        self.assertEqual(state.get(680).display_rating, 8.4)
        state.rate(680, 7)
        self.assertEqual(state.get(680).score_text, "7/10")
        self.assertEqual(state.get(680).display_rating, 7)

    def test_failed_write_keeps_previous_state(self):
        state = CollectionState(self.store)
        state.add(make_movie(1))

        def broken_save(movies):
            raise OSError("disk full")

        self.store.save = broken_save
        with self.assertRaises(OSError):
            state.add(make_movie(2))
        self.assertEqual([m.id for m in state.movies], [1])

    def test_invalid_update_leaves_state_and_store_untouched(self):
        self.store.save(sample_collection())
        state = CollectionState(self.store)
        document = self.storage.get_item(STORAGE_KEY)
        for patch in ({"title": None}, {"rating": 42}):
            with self.subTest(patch=patch):
                with self.assertRaises(ValidationError):
                    state.update(680, patch)
        self.assertEqual(state.get(680).title, "Pulp Fiction")
        self.assertEqual(self.storage.get_item(STORAGE_KEY), document)
        self.assertEqual(len(CollectionState(self.store)), 4)


if __name__ == '__main__':
    unittest.main()
