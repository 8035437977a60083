# emargement/views.py
from __future__ import annotations

"""
Vues de l'application "emargement".

Contenu :
- sonde de santé (sante) et état initial (etat_initial)
- application d'une commande sur l'état transmis par le front (commande)
- aperçus : livret paginé et plan de salle (mêmes modèles que l'export)
- sauvegarde / disposition : export en pièce jointe, import validé
- démarrage et polling de la tâche Celery d'export (export_start / export_status)
- téléchargement d'artefacts avec nom de fichier correct (Content-Disposition)

Points notables :
- Le serveur ne conserve aucun état de réunion : le front envoie la
  sauvegarde courante (clé "etat") et reçoit la nouvelle.
- Un fichier invalide donne 400 et l'état du front reste inchangé.
- Les artefacts sont stockés en cache sous em:{token}:{fmt}.
"""

import json
import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, HttpResponseNotFound, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .commandes import CommandeInvalide, appliquer_commande
from .etat import EtatReunion
from .moteurs.affectation import participants_non_places
from .moteurs.filtre import unites_distinctes
from .rendu.document import nom_fichier
from .rendu.modele_rendu import construire_modele_livret, construire_modele_sieges
from .rendu.utils_svg import svg_page_livret, svg_plan_sieges
from .sauvegarde import (
    SauvegardeInvalide,
    charger_disposition,
    charger_sauvegarde,
    exporter_disposition,
    exporter_sauvegarde,
    participant_vers_dict,
    vers_json,
)
from .tasks import parametres_pagination

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

class RequeteInvalide(ValueError):
    """Corps de requête illisible."""


def _lire_json(request: HttpRequest) -> Dict[str, Any]:
    try:
        data = json.loads((request.body or b"{}").decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RequeteInvalide("JSON invalide") from exc
    if not isinstance(data, dict):
        raise RequeteInvalide("objet JSON attendu")
    return data


def _etat_depuis(data: Dict[str, Any]) -> EtatReunion:
    """Restaure l'état envoyé par le front sous la clé "etat"."""
    brut = data.get("etat")
    if not isinstance(brut, dict):
        raise SauvegardeInvalide("clé 'etat' manquante")
    etat = charger_sauvegarde(brut)
    revision = brut.get("revision")
    if isinstance(revision, int) and not isinstance(revision, bool):
        etat = replace(etat, revision=revision)
    return etat


def _bornes_grille() -> Tuple[int, int]:
    return (
        int(getattr(settings, "EMARGEMENT_GRILLE_MIN", 3)),
        int(getattr(settings, "EMARGEMENT_GRILLE_MAX", 15)),
    )


def _etat_vers_dict(etat: EtatReunion) -> Dict[str, Any]:
    """Sauvegarde + révision + données dérivées utiles au front."""
    return {
        **exporter_sauvegarde(etat),
        "revision": etat.revision,
        "units": unites_distinctes(etat.participants),
        "unseated": [participant_vers_dict(p) for p in participants_non_places(etat.participants, etat.grille)],
    }


def _erreur(message: str, status: int = 400) -> JsonResponse:
    return JsonResponse({"error": message}, status=status)


def _piece_jointe(blob: bytes, filename: str, content_type: str = "application/json; charset=utf-8") -> HttpResponse:
    resp = HttpResponse(blob, content_type=content_type)
    resp["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp


# ---------------------------------------------------------------------------
# Pages basiques
# ---------------------------------------------------------------------------

def sante(request: HttpRequest) -> HttpResponse:
    """
    Sonde de santé (sans DB/cache), utile pour load balancer / monitoring.
    """
    return JsonResponse({"ok": True, "service": "emargement", "version": 1})


@require_GET
def etat_initial(request: HttpRequest) -> HttpResponse:
    """État par défaut : grille 6x8 pleine, aucun participant."""
    return JsonResponse({"etat": _etat_vers_dict(EtatReunion())})


# ---------------------------------------------------------------------------
# Commandes
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def commande(request: HttpRequest) -> HttpResponse:
    """
    Applique une commande à l'état transmis.

    Body : {"etat": <sauvegarde>, "commande": {"type": ..., ...}, "en_attente": <id|null>}
    Réponse : {"etat": <nouvelle sauvegarde>, "en_attente": <id|null>}
    """
    try:
        data = _lire_json(request)
        etat = _etat_depuis(data)
        # en_attente est validé par appliquer_commande (texte ou null)
        nouvel_etat, en_attente = appliquer_commande(
            etat, data.get("commande") or {}, en_attente=data.get("en_attente"), bornes=_bornes_grille()
        )
    except (RequeteInvalide, SauvegardeInvalide, CommandeInvalide) as exc:
        return _erreur(str(exc))

    return JsonResponse({"etat": _etat_vers_dict(nouvel_etat), "en_attente": en_attente})


# ---------------------------------------------------------------------------
# Aperçus (mêmes modèles de rendu que l'export)
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def apercu_livret(request: HttpRequest) -> HttpResponse:
    """Livret paginé : modèle de rendu + SVG de chaque page."""
    try:
        etat = _etat_depuis(_lire_json(request))
    except (RequeteInvalide, SauvegardeInvalide) as exc:
        return _erreur(str(exc))

    taille_page, marge_finale = parametres_pagination()
    modele = construire_modele_livret(etat, taille_page, marge_finale)
    return JsonResponse({
        **modele.vers_dict(),
        "svg": [svg_page_livret(modele, page) for page in modele.pages],
    })


@csrf_exempt
@require_POST
def apercu_sieges(request: HttpRequest) -> HttpResponse:
    """Plan de salle : modèle de rendu + SVG."""
    try:
        etat = _etat_depuis(_lire_json(request))
    except (RequeteInvalide, SauvegardeInvalide) as exc:
        return _erreur(str(exc))

    modele = construire_modele_sieges(etat)
    return JsonResponse({**modele.vers_dict(), "svg": svg_plan_sieges(modele)})


# ---------------------------------------------------------------------------
# Sauvegarde complète et disposition seule
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def export_sauvegarde(request: HttpRequest) -> HttpResponse:
    try:
        etat = _etat_depuis(_lire_json(request))
    except (RequeteInvalide, SauvegardeInvalide) as exc:
        return _erreur(str(exc))
    return _piece_jointe(vers_json(exporter_sauvegarde(etat)), nom_fichier(etat.infos, "json"))


@csrf_exempt
@require_POST
def import_sauvegarde(request: HttpRequest) -> HttpResponse:
    """Body : le contenu brut d'un fichier de sauvegarde."""
    try:
        etat = charger_sauvegarde(request.body or b"")
    except SauvegardeInvalide as exc:
        return _erreur(f"Fichier de sauvegarde invalide: {exc}")
    return JsonResponse({"etat": _etat_vers_dict(etat)})


@csrf_exempt
@require_POST
def export_disposition(request: HttpRequest) -> HttpResponse:
    try:
        etat = _etat_depuis(_lire_json(request))
    except (RequeteInvalide, SauvegardeInvalide) as exc:
        return _erreur(str(exc))
    return _piece_jointe(vers_json(exporter_disposition(etat.grille)), nom_fichier(etat.infos, "disposition.json"))


@csrf_exempt
@require_POST
def import_disposition(request: HttpRequest) -> HttpResponse:
    """Body : {"etat": <sauvegarde>, "disposition": <fichier de disposition>}."""
    try:
        data = _lire_json(request)
        etat = _etat_depuis(data)
        disposition = data.get("disposition")
        if not isinstance(disposition, dict):
            raise SauvegardeInvalide("clé 'disposition' manquante")
        etat = charger_disposition(disposition, etat)
    except (RequeteInvalide, SauvegardeInvalide) as exc:
        return _erreur(f"Fichier de disposition invalide: {exc}")
    return JsonResponse({"etat": _etat_vers_dict(etat)})


# ---------------------------------------------------------------------------
# Celery : démarrage + polling
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def export_start(request: HttpRequest) -> HttpResponse:
    """
    Lance la tâche Celery d'export :
    - Body : {"etat": <sauvegarde>}
    - Réponse : {"task_id": "..."} à poller via export_status
    """
    from .tasks import t_exporter_document

    try:
        data = _lire_json(request)
    except RequeteInvalide as exc:
        return _erreur(str(exc))
    task = t_exporter_document.delay({"etat": data.get("etat")})
    return JsonResponse({"task_id": task.id})


@require_GET
def export_status(request: HttpRequest, task_id: str) -> HttpResponse:
    """
    Polling d'état (PENDING / STARTED / SUCCESS / FAILURE).
    En cas de SUCCESS, renvoie aussi les URLs de téléchargement.
    """
    from celery.result import AsyncResult

    ar = AsyncResult(task_id)
    if ar.state in ("PENDING", "RECEIVED", "STARTED", "RETRY"):
        return JsonResponse({"status": ar.state})
    if ar.state == "SUCCESS":
        return JsonResponse(ar.result)  # type: ignore[arg-type]

    logger.error("Export %s en échec: %s", task_id, ar.result)
    return JsonResponse({"status": "FAILURE", "error": str(ar.result) or "échec."})


# ---------------------------------------------------------------------------
# Téléchargement
# ---------------------------------------------------------------------------

@require_GET
def download_artifact(request: HttpRequest, token: str, fmt: str) -> HttpResponse:
    """
    Sert un artefact depuis le cache via {token} et {fmt}.

    Le Content-Type est déduit du suffixe de fmt (après le dernier "_").
    """
    key = f"em:{token}:{fmt}"
    blob: Optional[bytes] = cache.get(key)  # type: ignore[assignment]
    if blob is None:
        return HttpResponseNotFound("introuvable ou expiré")

    filename = cache.get(f"{key}:name") or f"emargement-export-{fmt}"
    base = fmt.rsplit("_", 1)[-1].lower()
    content_type = {
        "svg": "image/svg+xml",
        "pdf": "application/pdf",
        "json": "application/json; charset=utf-8",
        "zip": "application/zip",
    }.get(base, "application/octet-stream")
    return _piece_jointe(blob, str(filename), content_type)
