# comments in French
from __future__ import annotations

from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path


def healthz(_request) -> HttpResponse:
    """endpoint très simple pour les sondes de liveness."""
    return HttpResponse("ok", content_type="text/plain")


urlpatterns = [
    # admin django
    path("super-portal-f0b2b3/", admin.site.urls),

    # listes d'émargement et plans de salle
    path("emargement/", include(("emargement.urls", "emargement"), namespace="emargement")),

    path("healthz", healthz),
]
