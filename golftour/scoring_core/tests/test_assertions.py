"""
Tests for the snapshot builder and the fluent assertion interface.
"""

import unittest

from golftour.scoring_core.assertions import assert_leaderboard
from golftour.scoring_core.builder import SnapshotBuilder
from golftour.scoring_core.engine import compute_leaderboard
from golftour.scoring_core.structure import ForfeitType, PlayerType
from golftour.scoring_core.tests.test_utils import single_course_builder


class SnapshotBuilderTests(unittest.TestCase):
    def test_players_get_sequential_ids(self):
        builder = single_course_builder().player("Kim", "Men").player("Lee", "Men")

        snapshot = builder.build()

        self.assertEqual(builder.metadata.players, {"Kim": "1", "Lee": "2"})
        self.assertEqual(snapshot.players["2"].display_name, "Lee")

    def test_explicit_player_id(self):
        snapshot = single_course_builder().player("Kim", "Men", player_id="p-7").build()

        self.assertIn("p-7", snapshot.players)

    def test_team_is_referred_to_by_both_names(self):
        snapshot = (
            single_course_builder(group="Pairs", type="team")
            .team("Oh", "Ko", "Pairs", affiliations=("North", "South"))
            .scores("Oh / Ko", "X", [4, 4])
            .build()
        )

        team = snapshot.players["1"]
        self.assertEqual(team.player_type, PlayerType.TEAM)
        self.assertEqual(team.names, ("Oh", "Ko"))
        self.assertEqual(snapshot.scores["1"]["X"], {1: 4, 2: 4})

    def test_course_order_follows_group_listing(self):
        snapshot = (
            SnapshotBuilder()
            .course("A")
            .course("B")
            .group("Men", ["B", "A"])
            .build()
        )

        self.assertEqual(snapshot.groups["Men"].assigned_course_ids(), ["B", "A"])

    def test_explicit_markers_are_passed_through(self):
        snapshot = (
            SnapshotBuilder()
            .course("A", order=2)
            .course("B", order=1)
            .group("Men", {"A": True, "B": {"order": 5}})
            .build()
        )

        self.assertEqual(snapshot.groups["Men"].assigned_course_ids(), ["A", "B"])

    def test_forfeit_type(self):
        snapshot = (
            single_course_builder()
            .player("Kim", "Men")
            .hole("Kim", "X", 1, 0)
            .forfeit_type("Kim", "disqualified")
            .build()
        )

        self.assertEqual(snapshot.forfeit_types, {"1": ForfeitType.DISQUALIFIED})

    def test_unknown_names_raise(self):
        builder = single_course_builder().player("Kim", "Men")

        with self.assertRaises(ValueError):
            builder.scores("Nobody", "X", [4])
        with self.assertRaises(ValueError):
            builder.hole("Kim", "Z", 1, 4)
        with self.assertRaises(ValueError):
            builder.group("Women", ["Z"])
        with self.assertRaises(ValueError):
            builder.backcount(group="Women")
        with self.assertRaises(ValueError):
            builder.ntp({"Nobody": 1})

    def test_too_many_holes_raise(self):
        builder = single_course_builder().player("Kim", "Men")

        with self.assertRaises(ValueError):
            builder.scores("Kim", "X", [4] * 10)


class LeaderboardAssertionTests(unittest.TestCase):
    def setUp(self):
        snapshot = (
            single_course_builder()
            .player("Kim", "Men")
            .player("Lee", "Men")
            .scores("Kim", "X", [4] * 8 + [3])
            .scores("Lee", "X", [4] * 9)
            .build()
        )
        self.board = compute_leaderboard(snapshot)

    def test_passing_assertions_chain(self):
        assert_leaderboard(self.board).progress("Men", 100).group("Men").size(
            2
        ).order(["Kim", "Lee"]).player("Kim").rank(1).total(35).plus_minus(
            -1
        ).course_total("X", 35).forfeited(False).has_score().status("playing")

    def test_failing_assertions_raise(self):
        group = assert_leaderboard(self.board).group("Men")

        with self.assertRaises(AssertionError):
            group.player("Kim").rank(2)
        with self.assertRaises(AssertionError):
            group.order(["Lee", "Kim"])
        with self.assertRaises(AssertionError):
            group.player("Nobody")
        with self.assertRaises(AssertionError):
            group.size(3)
        with self.assertRaises(AssertionError):
            assert_leaderboard(self.board).group("Women")
        with self.assertRaises(AssertionError):
            assert_leaderboard(self.board).progress("Men", 50)
        with self.assertRaises(AssertionError):
            assert_leaderboard(self.board).failed_groups("Men")
        with self.assertRaises(AssertionError):
            assert_leaderboard(self.board).sudden_death().rank("Kim", 1)


if __name__ == "__main__":
    unittest.main()
