from .base import *

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# pas de Redis en test : cache local et Celery exécuté en ligne
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "emargement-tests",
    }
}
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_TASK_STORE_EAGER_RESULT = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

EMARGEMENT_LIGNES_PAR_PAGE = 10
EMARGEMENT_MARGE_FINALE = 3

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
