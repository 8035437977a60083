from .base import *
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env.dev into process env for local development only.
load_dotenv(Path(BASE_DIR) / ".env.dev")


DEBUG = True
ALLOWED_HOSTS = []

# .env.dev est chargé après base : relire les surcharges
EMARGEMENT_LIGNES_PAR_PAGE = int(os.getenv("EMARGEMENT_LIGNES_PAR_PAGE", EMARGEMENT_LIGNES_PAR_PAGE))
EMARGEMENT_MARGE_FINALE = int(os.getenv("EMARGEMENT_MARGE_FINALE", EMARGEMENT_MARGE_FINALE))

EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
