"""
Management command to generate a simulated tournament snapshot.

The snapshot holds a Faker roster split over the simulated groups and random
hole scores around par, and can be fed straight to compute_leaderboard.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from golftour.leaderboard.simulation import TournamentSimulator


class Command(BaseCommand):
    help = "Generate a simulated tournament snapshot JSON file"

    def add_arguments(self, parser):
        parser.add_argument("output", type=str, help="Path of the JSON file to write")
        parser.add_argument(
            "--players",
            type=int,
            default=48,
            help="Number of individual players (default: 48)",
        )
        parser.add_argument(
            "--teams",
            type=int,
            default=16,
            help="Number of two-person teams (default: 16)",
        )
        parser.add_argument(
            "--seed",
            type=int,
            help="Random seed for a reproducible tournament",
        )
        parser.add_argument(
            "--forfeit-rate",
            type=float,
            default=0.02,
            help="Probability that a player posts a zero on one hole (default: 0.02)",
        )
        parser.add_argument(
            "--completion",
            type=float,
            default=1.0,
            help="Share of holes already scored, 0 to 1 (default: 1.0)",
        )
        parser.add_argument(
            "--locale",
            type=str,
            default="en_US",
            help="Faker locale for player names (default: en_US)",
        )

    def handle(self, *args, **options):
        if options["players"] < 0 or options["teams"] < 0:
            raise CommandError("Player and team counts cannot be negative")

        simulator = TournamentSimulator(seed=options["seed"], locale=options["locale"])
        try:
            raw = simulator.generate(
                individuals=options["players"],
                teams=options["teams"],
                forfeit_rate=options["forfeit_rate"],
                completion=options["completion"],
            )
        except ValueError as e:
            raise CommandError(str(e))

        with open(options["output"], "w", encoding="utf-8") as f:
            json.dump(raw, f, ensure_ascii=False, indent=2)

        self.stdout.write(
            self.style.SUCCESS(
                f"✓ Simulated {options['players']} players "
                f"and {options['teams']} teams"
            )
        )
        self.stdout.write(f"  - written to {options['output']}")
