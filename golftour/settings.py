"""
Django settings for golftour.

The scoring core needs no database; the project only uses Django for its app
registry, settings, logging configuration and management commands.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("GOLFTOUR_SECRET_KEY", "golftour-insecure-development-key")

DEBUG = os.environ.get("GOLFTOUR_DEBUG", "0") == "1"

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "golftour.scoring_core",
    "golftour.leaderboard",
]

MIDDLEWARE = []

DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Leaderboard engine

# Upper bound on memoized pairwise tiebreak comparisons per ranking pass
GOLFTOUR_COMPARATOR_CACHE_SIZE = int(
    os.environ.get("GOLFTOUR_COMPARATOR_CACHE_SIZE", "10000")
)

# Group name shown for players that are not in any group
GOLFTOUR_UNASSIGNED_GROUP = os.environ.get("GOLFTOUR_UNASSIGNED_GROUP", "Unassigned")

GOLFTOUR_LOG_LEVEL = os.environ.get("GOLFTOUR_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "golftour": {
            "handlers": ["console"],
            "level": GOLFTOUR_LOG_LEVEL,
            "propagate": False,
        },
    },
}
