import os
import tempfile
import unittest
from pathlib import Path

from luckydraw.errors import PersistenceError
from luckydraw.models import DrawState, LotteryConfig
from luckydraw.repositories import ConfigRepository, DrawStateRepository
from luckydraw.repositories.json_store import JsonFileStore


class JsonFileStoreTests(unittest.TestCase):
    def test_write_then_read_leaves_no_temp_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileStore(Path(tmpdir) / "nested" / "doc.json")
            store.write({"a": 1, "name": "一等奖"})

            self.assertEqual(store.read(), {"a": 1, "name": "一等奖"})
            self.assertEqual(os.listdir(Path(tmpdir) / "nested"), ["doc.json"])

    def test_missing_file_reads_as_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertIsNone(JsonFileStore(Path(tmpdir) / "nope.json").read())

    def test_corrupt_file_reads_as_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "doc.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertIsNone(JsonFileStore(path).read())

    def test_failed_write_raises_and_keeps_previous_document(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "doc.json"
            store = JsonFileStore(path)
            store.write({"version": 1})

            with self.assertRaises(PersistenceError):
                store.write({"bad": object()})

            self.assertEqual(store.read(), {"version": 1})
            self.assertEqual(os.listdir(tmpdir), ["doc.json"])

    def test_unwritable_directory_raises_persistence_error(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "blocker"
            blocker.write_text("", encoding="utf-8")
            store = JsonFileStore(blocker / "doc.json")
            with self.assertRaises(PersistenceError) as ctx:
                store.write({"a": 1})
            self.assertEqual(ctx.exception.status_code, 500)


class RepositoryTests(unittest.TestCase):
    def test_defaults_when_files_are_missing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            state = DrawStateRepository(tmpdir).load()
            config = ConfigRepository(tmpdir).load()

        self.assertEqual(state, DrawState())
        self.assertFalse(config.allow_repeat_win)
        self.assertEqual(config.numbers_per_row, 10)
        self.assertEqual(config.number_pool.excludeContains, ["4", "13"])

    def test_legacy_state_without_all_winners(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            JsonFileStore(Path(tmpdir) / "lottery-state.json").write(
                {"numberPool": ["001"], "prizeRemaining": {"1-1": 1}, "winnersByPrize": {}}
            )
            state = DrawStateRepository(tmpdir).load()

        self.assertEqual(state.number_pool, ["001"])
        self.assertEqual(state.all_winners, [])

    def test_legacy_exclude_patterns_are_migrated(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            JsonFileStore(Path(tmpdir) / "config.json").write(
                {"allowRepeatWin": True, "numberPoolConfig": {"start": 1, "end": 50, "excludePatterns": ["7"]}}
            )
            config = ConfigRepository(tmpdir).load()

        self.assertTrue(config.allow_repeat_win)
        self.assertEqual(config.number_pool.excludeContains, ["7"])
        self.assertEqual(config.number_pool.end, 50)
        self.assertNotIn("excludePatterns", config.to_dict()["numberPoolConfig"])

    def test_empty_calibration_is_not_written(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = ConfigRepository(tmpdir)
            repo.save(LotteryConfig())
            raw = JsonFileStore(repo.path).read()

        self.assertNotIn("calibration", raw)


if __name__ == "__main__":
    unittest.main()
