from django.apps import AppConfig


class ScoringCoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'golftour.scoring_core'
    verbose_name = 'Stroke-Play Scoring Core'
