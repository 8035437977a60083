from __future__ import annotations

"""
Sauvegarde / restauration de l'état d'une réunion au format JSON.

Deux formats :
- la sauvegarde complète (infos, participants, grille avec occupants),
  versionnée, ré-importable ;
- la disposition seule (géométrie de la salle, sans aucun occupant).

Toute la validation a lieu avant de construire le nouvel état : en cas
d'erreur, `SauvegardeInvalide` est levée et l'appelant garde son état.
Les champs absents des anciennes sauvegardes reçoivent une valeur par défaut.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from django.utils import timezone

from .etat import EtatReunion
from .modele.grille import GrilleSieges
from .modele.invariants import GrilleIncoherente, assurer_grille_coherente
from .modele.participant import Participant, Regime
from .modele.reunion import InfosReunion, TypeLibelleUnite
from .modele.siege import Siege, TypeSiege

logger = logging.getLogger(__name__)

FORMAT_SAUVEGARDE = "emargement-export"
VERSION_SAUVEGARDE = "1.0"
VERSIONS_ACCEPTEES = frozenset({VERSION_SAUVEGARDE})
TYPE_DISPOSITION = "seating-layout"

# clé JSON -> attribut de InfosReunion (hors booléen / enum traités à part)
_CHAMPS_INFOS: Dict[str, str] = {
    "organizer": "organisateur",
    "mainTitle": "titre_principal",
    "subTitle": "sous_titre",
    "docName": "nom_document",
    "time": "horaire",
    "location": "lieu",
    "chairperson": "president",
    "recorder": "secretaire",
}

Source = Union[str, bytes, Mapping[str, Any]]


class SauvegardeInvalide(ValueError):
    """Fichier de sauvegarde ou de disposition structurellement invalide."""


# ---------------------------------------------------------------------------
# helpers de validation
# ---------------------------------------------------------------------------

def _decoder(source: Source) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source
    try:
        texte = source.decode("utf-8") if isinstance(source, bytes) else source
        data = json.loads(texte)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SauvegardeInvalide(f"JSON illisible: {exc}") from exc
    if not isinstance(data, dict):
        raise SauvegardeInvalide("La racine du fichier doit être un objet JSON")
    return data


def _texte(valeur: Any, defaut: str = "") -> str:
    if valeur is None:
        return defaut
    if isinstance(valeur, (str, int, float)) and not isinstance(valeur, bool):
        return str(valeur)
    raise SauvegardeInvalide(f"Texte attendu, reçu {type(valeur).__name__}")


def _entier(valeur: Any, nom: str) -> int:
    if isinstance(valeur, bool) or not isinstance(valeur, int):
        raise SauvegardeInvalide(f"{nom}: entier attendu, reçu {valeur!r}")
    return valeur


def _enum(cls, valeur: Any, defaut, nom: str):
    if valeur is None:
        return defaut
    try:
        return cls(valeur)
    except ValueError as exc:
        raise SauvegardeInvalide(f"{nom}: valeur inconnue {valeur!r}") from exc


# ---------------------------------------------------------------------------
# lecture
# ---------------------------------------------------------------------------

def infos_depuis_dict(data: Mapping[str, Any]) -> InfosReunion:
    """Construit `InfosReunion` ; les clés absentes prennent leur valeur par défaut."""
    defauts = InfosReunion()
    champs: Dict[str, Any] = {
        attr: _texte(data.get(cle), getattr(defauts, attr))
        for cle, attr in _CHAMPS_INFOS.items()
    }
    show = data.get("showDietary", defauts.afficher_regime)
    if not isinstance(show, bool):
        raise SauvegardeInvalide(f"showDietary: booléen attendu, reçu {show!r}")
    champs["afficher_regime"] = show
    champs["type_libelle_unite"] = _enum(
        TypeLibelleUnite, data.get("unitLabelType"), defauts.type_libelle_unite, "unitLabelType"
    )
    return InfosReunion(**champs)


def _participants_depuis(items: Any) -> Tuple[Participant, ...]:
    if not isinstance(items, list):
        raise SauvegardeInvalide("participants: liste attendue")
    out: List[Participant] = []
    vus: set[str] = set()
    for i, p in enumerate(items):
        participant = participant_depuis_dict(p, f"participants[{i}]")
        if participant.id in vus:
            raise SauvegardeInvalide(f"participants[{i}]: identifiant en double {participant.id!r}")
        vus.add(participant.id)
        out.append(participant)
    return tuple(out)


def participant_depuis_dict(p: Any, nom: str = "participant") -> Participant:
    """Construit un `Participant` ; seul `id` est obligatoire."""
    if not isinstance(p, dict):
        raise SauvegardeInvalide(f"{nom}: objet attendu")
    pid = _texte(p.get("id"))
    if not pid:
        raise SauvegardeInvalide(f"{nom}: identifiant manquant")
    return Participant(
        id=pid,
        unite=_texte(p.get("unit")),
        fonction=_texte(p.get("title")),
        nom=_texte(p.get("name")),
        remarque=_texte(p.get("note")),
        regime=_enum(Regime, p.get("dietary"), Regime.VIANDE, f"{nom}.dietary"),
    )


def _siege_depuis(s: Any, i: int, avec_occupant: bool) -> Siege:
    if not isinstance(s, dict):
        raise SauvegardeInvalide(f"seats[{i}]: objet attendu")
    actif = s.get("isActive", True)
    if not isinstance(actif, bool):
        raise SauvegardeInvalide(f"seats[{i}].isActive: booléen attendu")
    type_s = _enum(TypeSiege, s.get("type"), TypeSiege.STANDARD, f"seats[{i}].type")
    occupant: Optional[str] = (_texte(s.get("participantId")) or None) if avec_occupant else None

    # un siège inactif est toujours standard et libre
    if not actif:
        type_s, occupant = TypeSiege.STANDARD, None
    return Siege(
        rangee=_entier(s.get("row"), f"seats[{i}].row"),
        colonne=_entier(s.get("col"), f"seats[{i}].col"),
        actif=actif,
        type=type_s,
        participant_id=occupant,
    )


def _grille_depuis(data: Any, avec_occupants: bool) -> GrilleSieges:
    if not isinstance(data, dict):
        raise SauvegardeInvalide("configuration de grille: objet attendu")
    rangees = _entier(data.get("rows"), "rows")
    colonnes = _entier(data.get("cols"), "cols")
    if rangees <= 0 or colonnes <= 0:
        raise SauvegardeInvalide(f"dimensions invalides: {rangees}x{colonnes}")
    seats = data.get("seats")
    if not isinstance(seats, list):
        raise SauvegardeInvalide("seats: liste attendue")

    sieges = [_siege_depuis(s, i, avec_occupants) for i, s in enumerate(seats)]
    try:
        grille = GrilleSieges(rangees, colonnes, sieges)
        return assurer_grille_coherente(grille)
    except GrilleIncoherente as exc:
        raise SauvegardeInvalide(f"grille incohérente: {exc}") from exc
    except ValueError as exc:
        raise SauvegardeInvalide(str(exc)) from exc


def _unites_depuis(valeur: Any) -> Optional[frozenset[str]]:
    if valeur is None:
        return None
    if not isinstance(valeur, list):
        raise SauvegardeInvalide("selectedUnits: liste attendue")
    return frozenset(_texte(u) for u in valeur)


def _verifier_entete(data: Mapping[str, Any]) -> None:
    """
    `format` absent (anciens fichiers) ou égal à FORMAT_SAUVEGARDE ;
    `version` absente (lue comme "1.0") ou parmi VERSIONS_ACCEPTEES.
    """
    fmt = data.get("format")
    if fmt is not None and fmt != FORMAT_SAUVEGARDE:
        raise SauvegardeInvalide(f"format inconnu {fmt!r}")
    version = data.get("version", VERSION_SAUVEGARDE)
    if not isinstance(version, str) or version not in VERSIONS_ACCEPTEES:
        raise SauvegardeInvalide(f"version non prise en charge {version!r}")


def charger_sauvegarde(source: Source, base: Optional[EtatReunion] = None) -> EtatReunion:
    """
    Restaure un état depuis une sauvegarde complète.

    - `meetingInfo` (objet) et `participants` (liste) sont obligatoires.
    - `seatingConfig` est facultatif : absent, la grille de `base` est gardée.
    - Les références de sièges vers des participants inconnus sont tolérées.

    Lève `SauvegardeInvalide` sans rien modifier si le fichier est invalide.
    """
    base = base or EtatReunion()
    try:
        data = _decoder(source)
        _verifier_entete(data)
        infos_brutes = data.get("meetingInfo")
        if not isinstance(infos_brutes, dict):
            raise SauvegardeInvalide("meetingInfo: objet attendu")
        infos = infos_depuis_dict(infos_brutes)
        participants = _participants_depuis(data.get("participants"))
        grille = base.grille
        if data.get("seatingConfig") is not None:
            grille = _grille_depuis(data["seatingConfig"], avec_occupants=True)
        unites = _unites_depuis(data.get("selectedUnits"))
    except SauvegardeInvalide as exc:
        logger.warning("Sauvegarde rejetée: %s", exc)
        raise

    return base.evoluer(infos=infos, participants=participants, grille=grille, unites=unites)


def charger_disposition(source: Source, base: EtatReunion) -> EtatReunion:
    """
    Applique une disposition de salle sur `base`.

    Tous les sièges importés sont libres, quel que soit le contenu du fichier.
    """
    try:
        data = _decoder(source)
        if data.get("type") != TYPE_DISPOSITION:
            raise SauvegardeInvalide(f"type attendu {TYPE_DISPOSITION!r}, reçu {data.get('type')!r}")
        grille = _grille_depuis(data, avec_occupants=False)
    except SauvegardeInvalide as exc:
        logger.warning("Disposition rejetée: %s", exc)
        raise
    return base.evoluer(grille=grille)


# ---------------------------------------------------------------------------
# écriture
# ---------------------------------------------------------------------------

def _siege_vers_dict(s: Siege, avec_occupant: bool) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": s.id,
        "row": s.rangee,
        "col": s.colonne,
        "isActive": s.actif,
        "type": s.type.value,
    }
    if avec_occupant:
        d["participantId"] = s.participant_id
    return d


def participant_vers_dict(p: Participant) -> Dict[str, Any]:
    return {
        "id": p.id,
        "unit": p.unite,
        "title": p.fonction,
        "name": p.nom,
        "note": p.remarque,
        "dietary": p.regime.value,
    }


def infos_vers_dict(infos: InfosReunion) -> Dict[str, Any]:
    d: Dict[str, Any] = {cle: getattr(infos, attr) for cle, attr in _CHAMPS_INFOS.items()}
    d["showDietary"] = infos.afficher_regime
    d["unitLabelType"] = infos.type_libelle_unite.value
    return d


def exporter_sauvegarde(etat: EtatReunion, horodatage: Optional[datetime] = None) -> Dict[str, Any]:
    """Construit la sauvegarde complète (JSON-friendly, auto-documentée)."""
    grille = etat.grille
    return {
        "format": FORMAT_SAUVEGARDE,
        "version": VERSION_SAUVEGARDE,
        "meetingInfo": infos_vers_dict(etat.infos),
        "participants": [participant_vers_dict(p) for p in etat.participants],
        "seatingConfig": {
            "rows": grille.rangees,
            "cols": grille.colonnes,
            "seats": [_siege_vers_dict(s, avec_occupant=True) for s in grille.sieges()],
        },
        "selectedUnits": None if etat.unites is None else sorted(etat.unites),
        "timestamp": (horodatage or timezone.now()).isoformat(),
    }


def exporter_disposition(grille: GrilleSieges) -> Dict[str, Any]:
    """Construit la disposition seule ; aucun `participantId` n'est écrit."""
    return {
        "type": TYPE_DISPOSITION,
        "rows": grille.rangees,
        "cols": grille.colonnes,
        "seats": [_siege_vers_dict(s, avec_occupant=False) for s in grille.sieges()],
    }


def vers_json(data: Mapping[str, Any]) -> bytes:
    return json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")
