from __future__ import annotations

import logging
import secrets
from typing import Any, Dict

from celery import shared_task
from django.conf import settings
from django.core.cache import cache
from django.urls import reverse

from .rendu.document import Artefacts, rendre_document
from .sauvegarde import SauvegardeInvalide, charger_sauvegarde

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- helpers

def parametres_pagination() -> tuple[int, int]:
    """(lignes par page, marge finale) partagés par l'aperçu et l'export."""
    return (
        int(getattr(settings, "EMARGEMENT_LIGNES_PAR_PAGE", 10)),
        int(getattr(settings, "EMARGEMENT_MARGE_FINALE", 3)),
    )


def cache_artefacts(artefacts: Artefacts, ttl_seconds: int) -> Dict[str, Any]:
    """
    Stocke chaque artefact en cache et renvoie un dict fmt -> URL de téléchargement.
    Enregistre aussi le nom public (em:{token}:{fmt}:name) pour l'en-tête.
    """
    token = secrets.token_urlsafe(16)
    urls: Dict[str, str] = {}
    for fmt, (fname, blob) in artefacts.items():
        key = f"em:{token}:{fmt}"
        cache.set(key, blob, ttl_seconds)
        cache.set(f"{key}:name", fname, ttl_seconds)
        urls[fmt] = reverse("emargement:download_artifact", kwargs={"token": token, "fmt": fmt})
    return {"token": token, **urls}


# --------------------------------------------------------------------------- tâche principale

@shared_task(bind=True)
def t_exporter_document(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Tâche asynchrone d'export :
      - restaure l'état depuis la sauvegarde transmise (payload["etat"]),
      - construit les modèles de rendu (livret paginé + plan de salle),
      - rend les artefacts (SVG/PDF/JSON/ZIP) et les met en cache.

    Une entrée invalide donne {"status": "FAILURE", "error": ...}.
    """
    try:
        etat = charger_sauvegarde(payload.get("etat") or {})
    except SauvegardeInvalide as exc:
        return {"status": "FAILURE", "error": f"Sauvegarde invalide: {exc}"}

    taille_page, marge_finale = parametres_pagination()
    logger.info("Export document: %d participant(s), tâche %s", len(etat.participants), self.request.id)

    artefacts = rendre_document(etat, taille_page=taille_page, marge_finale=marge_finale)
    ttl = int(getattr(settings, "EMARGEMENT_ARTEFACT_TTL", 3600))
    download = cache_artefacts(artefacts, ttl)

    return {
        "status": "SUCCESS",
        "download": download,
        "filename": artefacts["zip"][0],
        "formats": sorted(artefacts),
    }
