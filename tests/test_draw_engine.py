import random
import tempfile
import threading
import unittest
from unittest import mock

from luckydraw.errors import NotFoundError, PersistenceError, StateConflictError
from luckydraw.models import NumberPoolConfig, PoolType
from luckydraw.services.draw_engine import POOL_EMPTY, QUOTA_REACHED, pick_winners
from luckydraw.services.number_pool_service import generate_number_pool
from tests.support import make_runtime, seed


class PickWinnersTests(unittest.TestCase):
    def test_winners_are_distinct_members_of_the_pool(self):
        pool = [f"{n:03d}" for n in range(1, 101)]
        rng = random.Random(42)
        for count in (1, 5, 50, 100, 150):
            winners, consumed = pick_winners(pool, count, rng=rng)
            self.assertEqual(len(winners), min(count, len(pool)))
            self.assertEqual(len(set(winners)), len(winners))
            self.assertTrue(set(winners) <= set(pool))
            self.assertEqual(consumed, [])

    def test_calibration_is_taken_first_and_padded(self):
        pool = ["001", "007", "010", "020"]
        winners, consumed = pick_winners(pool, 2, calibration=["7", "010"], rng=random.Random(1))

        self.assertEqual(sorted(winners), ["007", "010"])
        self.assertEqual(consumed, ["7", "010"])

    def test_calibration_tokens_outside_the_pool_are_skipped(self):
        winners, consumed = pick_winners(["001", "002"], 1, calibration=["999"], rng=random.Random(1))
        self.assertEqual(consumed, [])
        self.assertEqual(len(winners), 1)

    def test_calibration_is_padded_on_mixed_width_pools(self):
        pool = generate_number_pool(NumberPoolConfig(start=1, end=1000, excludeContains=[], excludeExact=[]))
        self.assertIn("1000", pool)

        winners, consumed = pick_winners(pool, 1, calibration=["7"], rng=random.Random(3))

        self.assertEqual(winners, ["007"])
        self.assertEqual(consumed, ["7"])

    def test_calibration_longer_than_count_is_truncated(self):
        winners, consumed = pick_winners(["001", "002", "003"], 1, calibration=["002", "003"])
        self.assertEqual(winners, ["002"])
        self.assertEqual(consumed, ["002"])


class DrawEngineTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.runtime, self.emitter = make_runtime(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_preset_draw_until_quota_reached(self):
        seed(self.runtime, pool=["001", "002", "003"], prizes=[("1-1", 2)])

        result = self.runtime.engine.draw("1-1", 2)
        state = self.runtime.state_repository.load()

        self.assertEqual(len(result.winners), 2)
        self.assertTrue(set(result.winners) <= {"001", "002", "003"})
        self.assertEqual(state.prize_remaining["1-1"], 0)
        self.assertEqual(len(state.number_pool), 1)
        self.assertEqual(sorted(state.winners_of("1-1")), sorted(result.winners))
        self.assertEqual(sorted(state.all_winners), sorted(result.winners))
        self.assertEqual(state.winners_by_prize["1-1"].level, "L1-1")

        with self.assertRaises(StateConflictError) as ctx:
            self.runtime.engine.draw("1-1", 1)
        self.assertEqual(ctx.exception.message, QUOTA_REACHED)

    def test_actual_count_is_capped_by_remaining_and_pool(self):
        seed(self.runtime, pool=["001", "002", "003"], prizes=[("1-1", 10)])

        result = self.runtime.engine.draw("1-1", 5)

        self.assertEqual(len(result.winners), 3)
        self.assertEqual(result.state.prize_remaining["1-1"], 7)
        with self.assertRaises(StateConflictError) as ctx:
            self.runtime.engine.draw("1-1", 1)
        self.assertEqual(ctx.exception.message, POOL_EMPTY)

    def test_calibration_is_consumed(self):
        seed(
            self.runtime,
            pool=["001", "007", "010"],
            prizes=[("1-1", 1)],
            calibration={"1-1": ["007"], "1-2": ["001"]},
        )

        result = self.runtime.engine.draw("1-1", 1)
        config = self.runtime.config_repository.load()

        self.assertEqual(result.winners, ["007"])
        self.assertNotIn("1-1", config.calibration)
        self.assertEqual(config.calibration, {"1-2": ["001"]})

    def test_live_round_draws_from_roster(self):
        seed(self.runtime, pool_type=PoolType.LIVE, pool=["001"], prizes=[("1-1", 5)], roster=["A1", "B2"])

        result = self.runtime.engine.draw("1-1", 5)
        roster = self.runtime.roster_repository.load()
        state = self.runtime.state_repository.load()

        self.assertEqual(sorted(result.winners), ["A1", "B2"])
        self.assertEqual(roster.registrations, [])
        self.assertEqual(state.prize_remaining["1-1"], 3)
        self.assertEqual(state.number_pool, ["001"])

    def test_repeat_wins_keep_the_pool_but_not_the_same_prize(self):
        seed(self.runtime, pool=["001", "002"], prizes=[("1-1", 2), ("1-2", 2)], allow_repeat_win=True)

        first = self.runtime.engine.draw("1-1", 1)
        second = self.runtime.engine.draw("1-1", 1)
        other = self.runtime.engine.draw("1-2", 2)
        state = self.runtime.state_repository.load()

        self.assertNotEqual(first.winners, second.winners)
        self.assertEqual(sorted(other.winners), ["001", "002"])
        self.assertEqual(state.number_pool, ["001", "002"])

    def test_winners_of_one_prize_are_excluded_from_others(self):
        seed(self.runtime, pool=["001", "002", "003"], prizes=[("1-1", 1), ("1-2", 3)])
        # Put a winner back into the pool to check cross-prize exclusion.
        first = self.runtime.engine.draw("1-1", 1)
        state = self.runtime.state_repository.load()
        state.number_pool = ["001", "002", "003"]
        self.runtime.state_repository.save(state)

        other = self.runtime.engine.draw("1-2", 3)

        self.assertEqual(len(other.winners), 2)
        self.assertNotIn(first.winners[0], other.winners)

    def test_restrict_to_limits_candidates(self):
        seed(self.runtime, pool=["001", "002", "003"], prizes=[("1-1", 3)])
        result = self.runtime.engine.draw("1-1", 3, restrict_to=["002", "999"])
        self.assertEqual(result.winners, ["002"])

    def test_unknown_prize(self):
        seed(self.runtime)
        with self.assertRaises(NotFoundError):
            self.runtime.engine.draw("9-9", 1)

    def test_failed_draw_changes_nothing(self):
        seed(self.runtime, pool=[], prizes=[("1-1", 1)])
        before = self.runtime.state_repository.load()

        with self.assertRaises(StateConflictError):
            self.runtime.engine.draw("1-1", 1)

        self.assertEqual(self.runtime.state_repository.load(), before)

    def test_reset_single_prize_is_idempotent(self):
        seed(self.runtime, pool=["001", "002", "003"], prizes=[("1-1", 1), ("1-2", 1)])
        self.runtime.engine.draw("1-1", 1)
        kept = self.runtime.engine.draw("1-2", 1)

        once = self.runtime.engine.reset("1-1")
        twice = self.runtime.engine.reset("1-1")

        self.assertEqual(once, twice)
        self.assertEqual(twice.prize_remaining["1-1"], 1)
        self.assertEqual(twice.winners_of("1-1"), [])
        self.assertEqual(twice.all_winners, kept.winners)
        # The pool is never restored.
        self.assertEqual(len(twice.number_pool), 1)

    def test_full_reset(self):
        seed(self.runtime, pool=["001", "002", "003"], prizes=[("1-1", 1), ("1-2", 2)])
        self.runtime.engine.draw("1-1", 1)
        self.runtime.engine.draw("1-2", 2)

        state = self.runtime.engine.reset()

        self.assertEqual(state.prize_remaining, {"1-1": 1, "1-2": 2})
        self.assertEqual(state.winners_by_prize, {})
        self.assertEqual(state.all_winners, [])
        self.assertEqual(state.number_pool, [])

    def test_concurrent_draws_never_exceed_quota(self):
        seed(self.runtime, pool=[f"{n:03d}" for n in range(1, 21)], prizes=[("1-1", 5)])
        barrier = threading.Barrier(20)
        winners, conflicts, unexpected = [], [], []

        def worker():
            barrier.wait()
            try:
                winners.extend(self.runtime.engine.draw("1-1", 1).winners)
            except StateConflictError as exc:
                conflicts.append(exc)
            except Exception as exc:
                unexpected.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        state = self.runtime.state_repository.load()
        self.assertEqual(unexpected, [])
        self.assertEqual(len(winners), 5)
        self.assertEqual(len(set(winners)), 5)
        self.assertEqual(len(conflicts), 15)
        self.assertEqual(state.prize_remaining["1-1"], 0)
        self.assertEqual(sorted(state.winners_of("1-1")), sorted(winners))

    def test_failed_state_write_leaves_roster_and_calibration(self):
        seed(
            self.runtime,
            pool_type=PoolType.LIVE,
            prizes=[("1-1", 2)],
            roster=["A1", "B2", "C3"],
            calibration={"1-1": ["B2"]},
        )

        with mock.patch.object(
            self.runtime.state_repository, "save", side_effect=PersistenceError(message="disk full")
        ):
            with self.assertRaises(PersistenceError):
                self.runtime.engine.draw("1-1", 2)

        self.assertEqual(self.runtime.roster_repository.load().registrations, ["A1", "B2", "C3"])
        self.assertEqual(self.runtime.config_repository.load().calibration, {"1-1": ["B2"]})
        self.assertEqual(self.runtime.state_repository.load().prize_remaining["1-1"], 2)

    def test_reset_unknown_prize(self):
        seed(self.runtime)
        with self.assertRaises(NotFoundError):
            self.runtime.engine.reset("9-9")


if __name__ == "__main__":
    unittest.main()
