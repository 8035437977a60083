# emargement/apps.py
from django.apps import AppConfig


class EmargementConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "emargement"

    def ready(self):
        # enregistre les prédicats de gabarits et les commandes
        from .moteurs import gabarits  # noqa: F401
        from . import commandes  # noqa: F401
