"""
Management command to compute the leaderboard from a snapshot file.

This command reads the raw tournament records (players, scores, courses,
groups and playoff inputs) from a JSON file, ranks every group and prints the
standings, or writes them as JSON.
"""

import json
import os

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from golftour.scoring_core.engine import Leaderboard, RankingSession
from golftour.scoring_core.scoring import ScoringRules
from golftour.scoring_core.snapshot import snapshot_from_raw
from golftour.scoring_core.structure import AggregatedPlayer


def format_plus_minus(value):
    if value is None:
        return "-"
    if value == 0:
        return "E"
    return f"{value:+d}"


def format_rank(player: AggregatedPlayer) -> str:
    if player.rank is not None:
        return str(player.rank)
    if player.has_forfeited:
        return player.status.upper()
    return "-"


class Command(BaseCommand):
    help = "Compute the ranked leaderboard from a tournament snapshot JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "snapshot_file", type=str, help="Path to the snapshot JSON file"
        )
        parser.add_argument(
            "--group",
            type=str,
            help="Only show this group (default: all groups)",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the leaderboard as JSON instead of a table",
        )
        parser.add_argument(
            "--output",
            type=str,
            help="Write the leaderboard JSON to this file",
        )
        parser.add_argument(
            "--cache-size",
            type=int,
            default=settings.GOLFTOUR_COMPARATOR_CACHE_SIZE,
            help="Maximum number of memoized tiebreak comparisons (0 disables)",
        )

    def handle(self, *args, **options):
        snapshot_path = options["snapshot_file"]

        if not os.path.exists(snapshot_path):
            raise CommandError(f"Snapshot file not found: {snapshot_path}")

        try:
            with open(snapshot_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise CommandError(f"Error reading snapshot file: {e}")

        if not isinstance(raw, dict):
            raise CommandError("Snapshot file must contain a JSON object")

        rules = ScoringRules(
            cache_size=options["cache_size"],
            unassigned_group=settings.GOLFTOUR_UNASSIGNED_GROUP,
        )
        session = RankingSession(rules)
        leaderboard = session.compute(snapshot_from_raw(raw))

        group = options.get("group")
        if group is not None and group not in leaderboard.groups:
            raise CommandError(f"Group not found: {group}")

        data = leaderboard.to_dict()
        if group is not None:
            data["groups"] = {group: data["groups"][group]}
            data["progress"] = {group: data["progress"].get(group, 0)}

        if options.get("output"):
            with open(options["output"], "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            self.stdout.write(
                self.style.SUCCESS(f"✓ Leaderboard written to {options['output']}")
            )

        if options["json"]:
            self.stdout.write(json.dumps(data, ensure_ascii=False, indent=2))
        elif not options.get("output"):
            self._print_leaderboard(leaderboard, group)

        for failed in leaderboard.failed_groups:
            self.stderr.write(self.style.ERROR(f"Group {failed} could not be ranked"))

    def _print_leaderboard(self, leaderboard: Leaderboard, only_group=None):
        for group_name, players in leaderboard.groups.items():
            if only_group is not None and group_name != only_group:
                continue
            progress = leaderboard.progress.get(group_name, 0)
            self.stdout.write(
                self.style.MIGRATE_HEADING(f"{group_name} ({progress}% entered)")
            )
            for player in players:
                total = player.total if player.has_any_score else "-"
                self.stdout.write(
                    f"  {format_rank(player):>12}  jo {player.player.jo:<3} "
                    f"{player.player.display_name:<40} {total!s:>4} "
                    f"{format_plus_minus(player.plus_minus):>4}"
                )

        for label, results in (
            ("Individual sudden death", leaderboard.individual_sudden_death),
            ("Team sudden death", leaderboard.team_sudden_death),
        ):
            if not results:
                continue
            self.stdout.write(self.style.MIGRATE_HEADING(label))
            for result in results:
                self.stdout.write(
                    f"  {result.rank:>3}  {result.name:<40} "
                    f"{result.total_score:>4} ({result.holes_played} holes)"
                )
