"""
Tests for rank assignment within a group.
"""

import random
import unittest

from golftour.scoring_core.assertions import assert_leaderboard
from golftour.scoring_core.builder import SnapshotBuilder
from golftour.scoring_core.engine import compute_leaderboard
from golftour.scoring_core.ranking import rank_group, sort_contenders
from golftour.scoring_core.scoring import UNCACHED_RULES
from golftour.scoring_core.snapshot import snapshot_from_raw
from golftour.scoring_core.tiebreaks import backcount_courses
from golftour.scoring_core.tests.test_utils import (
    PAR3,
    PAR4,
    aggregate,
    make_course,
    names,
    ranks,
    single_course_builder,
)


class BaseRankingTests(unittest.TestCase):
    """Stroke-based ranks, before any playoff input."""

    def test_tie_for_first_is_left_as_a_block(self):
        snapshot = (
            single_course_builder(PAR3)
            .player("A", "Men")
            .player("B", "Men")
            .scores("A", "X", [3, 3, 3, 3, 3, 3, 3, 3, 2])
            .scores("B", "X", [3, 3, 3, 3, 3, 3, 3, 2, 3])
            .build()
        )

        board = compute_leaderboard(snapshot)

        # back-count puts A ahead, but both share first until a playoff decides
        assert_leaderboard(board).group("Men").order(["A", "B"]).ranks(
            {"A": 1, "B": 1}
        )

    def test_backcount_separates_a_tie_for_first_when_requested(self):
        snapshot = (
            single_course_builder(PAR3)
            .player("A", "Men")
            .player("B", "Men")
            .scores("A", "X", [3, 3, 3, 3, 3, 3, 3, 3, 2])
            .scores("B", "X", [3, 3, 3, 3, 3, 3, 3, 2, 3])
            .backcount()
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).group("Men").order(["A", "B"]).player("A").rank(
            1
        ).total(26).plus_minus(-1).player("B").rank(2).total(26).plus_minus(-1)

    def test_players_without_scores_and_forfeits_are_unranked_and_last(self):
        snapshot = (
            single_course_builder()
            .player("Kim", "Men")
            .player("Lee", "Men")
            .player("Park", "Men")
            .player("Choi", "Men")
            .scores("Kim", "X", [4, 4, 4, 4, 4, 4, 4, 4, 3])
            .scores("Park", "X", [0, 1, 1, 1, 1, 1, 1, 1, 1])
            .scores("Choi", "X", [4] * 9)
            .build()
        )

        board = compute_leaderboard(snapshot)

        group = assert_leaderboard(board).group("Men")
        group.order(["Kim", "Choi", "Lee", "Park"])
        group.player("Kim").rank(1).plus_minus(-1)
        group.player("Choi").rank(2).plus_minus(0)
        group.player("Lee").unranked().has_score(False).status("not_played")
        group.player("Park").unranked().forfeited().total(8).status("forfeit")

    def test_competition_ranks_with_shared_positions(self):
        snapshot = (
            single_course_builder()
            .player("Kim", "Men")
            .player("Lee", "Men")
            .player("Park", "Men")
            .player("Choi", "Men")
            .scores("Kim", "X", [4, 4, 4, 4, 4, 4, 4, 4, 2])
            .scores("Lee", "X", [4, 4, 4, 4, 4, 4, 4, 4, 3])
            .scores("Park", "X", [4, 4, 4, 4, 4, 4, 4, 4, 3])
            .scores("Choi", "X", [4] * 9)
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).group("Men").order(
            ["Kim", "Lee", "Park", "Choi"]
        ).ranks({"Kim": 1, "Lee": 2, "Park": 2, "Choi": 4})

    def test_backcount_separates_ties_below_first(self):
        snapshot = (
            single_course_builder()
            .player("Kim", "Men")
            .player("Lee", "Men")
            .player("Park", "Men")
            .player("Choi", "Men")
            .scores("Kim", "X", [4, 4, 4, 4, 4, 4, 4, 4, 2])
            .scores("Lee", "X", [4, 4, 4, 4, 4, 4, 4, 3, 4])
            .scores("Park", "X", [4, 4, 4, 4, 4, 4, 4, 4, 3])
            .scores("Choi", "X", [4] * 9)
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).group("Men").order(
            ["Kim", "Park", "Lee", "Choi"]
        ).ranks({"Kim": 1, "Park": 2, "Lee": 3, "Choi": 4})

    def test_rank_after_a_block_of_leaders_skips_positions(self):
        snapshot = (
            single_course_builder()
            .player("A", "Men")
            .player("B", "Men")
            .player("C", "Men")
            .player("D", "Men")
            .scores("A", "X", [4, 4, 4, 4, 4, 4, 4, 4, 3])
            .scores("B", "X", [3, 4, 4, 4, 4, 4, 4, 4, 4])
            .scores("C", "X", [4, 3, 4, 4, 4, 4, 4, 4, 4])
            .scores("D", "X", [4] * 9)
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).group("Men").order(["A", "C", "B", "D"]).ranks(
            {"A": 1, "B": 1, "C": 1, "D": 4}
        )

    def test_player_without_par_relative_total_sorts_last(self):
        snapshot = (
            single_course_builder((None, 4, 4, 4, 4, 4, 4, 4, 4))
            .player("Kim", "Men")
            .player("Lee", "Men")
            .hole("Kim", "X", 1, 3)
            .hole("Lee", "X", 2, 6)
            .build()
        )

        board = compute_leaderboard(snapshot)

        group = assert_leaderboard(board).group("Men")
        group.order(["Lee", "Kim"])
        group.player("Lee").rank(1).plus_minus(2)
        group.player("Kim").rank(2).plus_minus(None)


class RankGroupTests(unittest.TestCase):
    """rank_group as a pure function over aggregated players."""

    def setUp(self):
        self.courses = [make_course("X", PAR4)]
        self.reversed = backcount_courses(self.courses)

    def test_returns_new_players_and_leaves_input_unranked(self):
        players = [
            aggregate("b", {"X": [4] * 9}, self.courses),
            aggregate("a", {"X": [4] * 8 + [3]}, self.courses),
            aggregate("c", {}, self.courses),
        ]

        ranked = rank_group(players, self.reversed)

        self.assertEqual(names(ranked), ["a", "b", "c"])
        self.assertEqual(ranks(ranked), [1, 2, None])
        self.assertEqual(ranks(players), [None, None, None])

    def test_others_keep_their_input_order(self):
        players = [
            aggregate("z", {"X": [0]}, self.courses),
            aggregate("y", {}, self.courses),
            aggregate("x", {"X": [5]}, self.courses),
        ]

        ranked = rank_group(players, self.reversed)

        self.assertEqual(names(ranked), ["x", "z", "y"])
        self.assertEqual(ranks(ranked), [1, None, None])

    def test_sort_is_stable_for_true_ties(self):
        card = {"X": [4, 4, 5]}
        players = [aggregate(pid, card, self.courses) for pid in ("3", "1", "2")]

        ordered = sort_contenders(players, self.reversed)

        self.assertEqual(names(ordered), ["3", "1", "2"])

    def test_empty_group(self):
        self.assertEqual(rank_group([], self.reversed), [])


class RankingPropertyTests(unittest.TestCase):
    """Properties that hold for any field of players."""

    def build_field(self, seed=11):
        rng = random.Random(seed)
        builder = (
            SnapshotBuilder()
            .course("X", PAR4)
            .course("Y", PAR3)
            .group("Men", ["X", "Y"])
        )
        for index in range(40):
            name = f"Player {index:02d}"
            builder.player(name, "Men", jo=index // 4 + 1)
            if index % 13 == 0:
                continue
            for course_id, par in (("X", 4), ("Y", 3)):
                builder.scores(
                    name, course_id, [par + rng.randint(-1, 1) for _ in range(9)]
                )
            if index % 17 == 5:
                builder.hole(name, "Y", 4, 0)
        return builder

    def test_ranks_are_dense_competition_ranks(self):
        board = compute_leaderboard(self.build_field().build())
        players = board.group("Men")
        contenders = [p for p in players if p.rank is not None]

        self.assertTrue(contenders)
        self.assertTrue(all(p.rank is None for p in players[len(contenders):]))
        for position, player in enumerate(contenders, 1):
            self.assertGreaterEqual(player.rank, 1)
            self.assertLessEqual(player.rank, position)
            if player.rank > 1:
                better = sum(1 for p in contenders if p.rank < player.rank)
                self.assertEqual(player.rank, better + 1)

    def test_forfeited_players_never_rank_above_contenders(self):
        board = compute_leaderboard(self.build_field().build())
        players = board.group("Men")
        first_unranked = next(
            index for index, p in enumerate(players) if p.rank is None
        )

        for player in players[first_unranked:]:
            self.assertFalse(player.is_contender)
        for player in players[:first_unranked]:
            self.assertFalse(player.has_forfeited)

    def test_cache_does_not_change_the_result(self):
        snapshot = self.build_field().backcount().build()

        cached = compute_leaderboard(snapshot)
        uncached = compute_leaderboard(snapshot, rules=UNCACHED_RULES)

        self.assertEqual(cached.to_dict(), uncached.to_dict())

    def test_input_order_does_not_change_the_result(self):
        raw = self.build_field().to_raw()
        shuffled = dict(raw)
        shuffled["players"] = dict(reversed(list(raw["players"].items())))
        shuffled["scores"] = dict(reversed(list(raw["scores"].items())))

        forward = compute_leaderboard(snapshot_from_raw(raw))
        backward = compute_leaderboard(snapshot_from_raw(shuffled))

        self.assertEqual(forward.to_dict(), backward.to_dict())


if __name__ == "__main__":
    unittest.main()
