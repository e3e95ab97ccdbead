"""
Tests for sudden-death playoff standings.
"""

import unittest

from golftour.scoring_core.assertions import assert_leaderboard
from golftour.scoring_core.engine import compute_leaderboard
from golftour.scoring_core.structure import Player, PlayerType, SuddenDeathSession
from golftour.scoring_core.sudden_death import process_session, process_sudden_death
from golftour.scoring_core.tests.test_utils import (
    multi_group_builder,
    single_course_builder,
)


def leaders_builder():
    return (
        single_course_builder()
        .player("M", "Men")
        .player("N", "Men")
        .player("O", "Men")
        .scores("M", "X", [4] * 9)
        .scores("N", "X", [4] * 9)
        .scores("O", "X", [4] * 9)
    )


class SuddenDeathTests(unittest.TestCase):
    def test_more_holes_played_ranks_ahead(self):
        snapshot = (
            leaders_builder()
            .sudden_death(
                ["M", "N"], holes=[1, 2], scores={"M": [3, None], "N": [3, 4]}
            )
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).sudden_death().order(["N", "M"]).rank("N", 1).rank(
            "M", 2
        )
        n, m = board.individual_sudden_death
        self.assertEqual((n.total_score, n.holes_played), (7, 2))
        self.assertEqual((m.total_score, m.holes_played), (3, 1))

    def test_lower_total_wins_on_equal_holes(self):
        snapshot = (
            leaders_builder()
            .sudden_death(
                ["M", "N", "O"],
                holes=[1, 2],
                scores={"M": [4, 4], "N": [3, 4], "O": [3, 4]},
            )
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).sudden_death().order(["N", "O", "M"]).rank(
            "N", 1
        ).rank("O", 1).rank("M", 3)

    def test_participant_without_scores_ranks_last(self):
        snapshot = (
            leaders_builder()
            .sudden_death(["M", "N"], holes=[1], scores={"N": [5]})
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).sudden_death().order(["N", "M"]).rank("M", 2)

    def test_sudden_death_does_not_change_main_ranks(self):
        snapshot = (
            leaders_builder()
            .sudden_death(["M", "N"], holes=[1], scores={"M": [3], "N": [4]})
            .build()
        )

        board = compute_leaderboard(snapshot)

        assert_leaderboard(board).group("Men").ranks({"M": 1, "N": 1, "O": 1})

    def test_inactive_session_has_no_standings(self):
        snapshot = (
            leaders_builder()
            .sudden_death(["M", "N"], holes=[1], scores={"M": [3]}, active=False)
            .build()
        )

        board = compute_leaderboard(snapshot)

        self.assertEqual(board.individual_sudden_death, [])

    def test_session_without_holes_has_no_standings(self):
        snapshot = leaders_builder().sudden_death(["M", "N"], holes=[]).build()

        board = compute_leaderboard(snapshot)

        self.assertEqual(board.individual_sudden_death, [])

    def test_team_session_is_reported_separately(self):
        snapshot = (
            multi_group_builder()
            .team("Jang", "Seo", "Pairs")
            .team("Oh", "Ko", "Pairs")
            .sudden_death(
                ["Jang / Seo", "Oh / Ko"],
                holes=[9],
                scores={"Jang / Seo": [5], "Oh / Ko": [4]},
                team=True,
            )
            .build()
        )

        board = compute_leaderboard(snapshot)

        self.assertEqual(board.individual_sudden_death, [])
        assert_leaderboard(board).sudden_death(team=True).order(
            ["Oh / Ko", "Jang / Seo"]
        )

    def test_sessions_per_group_are_ranked_independently(self):
        snapshot = (
            multi_group_builder()
            .player("Kim", "Men")
            .player("Lee", "Men")
            .player("Han", "Women")
            .player("Yoon", "Women")
            .sudden_death(
                ["Han", "Yoon"],
                holes=[1],
                scores={"Han": [4], "Yoon": [3]},
                group="Women",
            )
            .sudden_death(
                ["Kim", "Lee"], holes=[1], scores={"Kim": [2], "Lee": [5]}, group="Men"
            )
            .build()
        )

        board = compute_leaderboard(snapshot)

        # concatenated in group name order, ranks restarting per group
        assert_leaderboard(board).sudden_death().order(
            ["Kim", "Lee", "Yoon", "Han"]
        ).rank("Kim", 1).rank("Lee", 2).rank("Yoon", 1).rank("Han", 2)


class ProcessSessionTests(unittest.TestCase):
    def setUp(self):
        self.players = {
            "1": Player(player_id="1", group="Men", names=("Kim",)),
            "2": Player(player_id="2", group="Men", names=("Lee",)),
            "3": Player(
                player_id="3",
                group="Pairs",
                player_type=PlayerType.TEAM,
                names=("Oh", "Ko"),
            ),
        }

    def test_unknown_participants_are_skipped(self):
        session = SuddenDeathSession(
            is_active=True,
            participants=("1", "99"),
            holes=(1,),
            scores={"1": {1: 4}, "99": {1: 2}},
        )

        results = process_session(session, self.players)

        self.assertEqual([r.player_id for r in results], ["1"])

    def test_scores_outside_session_holes_are_ignored(self):
        session = SuddenDeathSession(
            is_active=True,
            participants=("1", "2"),
            holes=(1, 2),
            scores={"1": {1: 4, 2: 4}, "2": {1: 4, 3: 1}},
        )

        results = process_session(session, self.players)

        self.assertEqual(
            [(r.name, r.holes_played) for r in results], [("Kim", 2), ("Lee", 1)]
        )

    def test_team_participants_use_display_name(self):
        session = SuddenDeathSession(
            is_active=True, participants=("3",), holes=(1,), scores={"3": {1: 4}}
        )

        (result,) = process_session(session, self.players)

        self.assertEqual(result.name, "Oh / Ko")
        self.assertEqual(result.rank, 1)

    def test_names_break_full_ties_deterministically(self):
        session = SuddenDeathSession(
            is_active=True,
            participants=("2", "1"),
            holes=(1,),
            scores={"1": {1: 4}, "2": {1: 4}},
        )

        results = process_session(session, self.players)

        self.assertEqual([r.name for r in results], ["Kim", "Lee"])
        self.assertEqual([r.rank for r in results], [1, 1])

    def test_no_data(self):
        self.assertEqual(process_sudden_death(None, self.players), [])
        self.assertEqual(process_session(None, self.players), [])


if __name__ == "__main__":
    unittest.main()
