from __future__ import annotations

"""
Commandes unitaires appliquées à un `EtatReunion` (une par événement UI).

Chaque commande est un dict `{"type": ..., <arguments>}` ; sa fabrique
enregistrée retourne le nouvel état et la référence « en attente » du
protocole de placement. Aucun état n'est modifié en place.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .controleur import ControleurPlacement, Mode, Outil
from .etat import EtatReunion
from .moteurs.affectation import affecter, liberer
from .moteurs.disposition import appliquer_gabarit, basculer_actif, basculer_console, redimensionner
from .moteurs.filtre import basculer_unite
from .roster import (
    ajouter_participant,
    analyser_texte_groupe,
    modifier_participant,
    nouvel_id,
    retirer_participant,
)
from .sauvegarde import SauvegardeInvalide, infos_depuis_dict, infos_vers_dict, participant_depuis_dict


class CommandeInvalide(ValueError):
    """Commande inconnue ou argument manquant / mal typé."""


@dataclass(frozen=True)
class ContexteCommande:
    """Contexte d'exécution d'une commande.

    Attributs
    ---------
    etat : EtatReunion
        État avant la commande.
    en_attente : Optional[str]
        Participant sélectionné en attente d'un clic.
    bornes : Optional[Tuple[int, int]]
        (min, max) imposés aux dimensions de grille, ou `None`.
    """

    etat: EtatReunion
    en_attente: Optional[str] = None
    bornes: Optional[Tuple[int, int]] = None


Resultat = Tuple[EtatReunion, Optional[str]]
ExecCommande = Callable[[Mapping[str, Any], ContexteCommande], Resultat]

_REGISTRE: Dict[str, ExecCommande] = {}


def enregistrer(type_c: str):
    """Décorateur enregistrant l'exécutant d'un type de commande."""

    def deco(fabrique: ExecCommande) -> ExecCommande:
        _REGISTRE[type_c] = fabrique
        return fabrique

    return deco


def appliquer_commande(
        etat: EtatReunion,
        commande: Mapping[str, Any],
        *,
        en_attente: Optional[str] = None,
        bornes: Optional[Tuple[int, int]] = None,
) -> Resultat:
    """
    Applique `commande` à `etat`.

    Lève `CommandeInvalide` si le type est inconnu, si un argument manque ou
    si `en_attente` n'est pas un identifiant texte.
    """
    if not isinstance(commande, Mapping):
        raise CommandeInvalide("commande: objet attendu")
    type_c = str(commande.get("type", "")).strip()
    fab = _REGISTRE.get(type_c)
    if fab is None:
        raise CommandeInvalide(f"Type de commande inconnu: {type_c!r}")
    ctx = ContexteCommande(etat=etat, en_attente=_id_en_attente(en_attente), bornes=bornes)
    return fab(commande, ctx)


def types_commandes() -> list[str]:
    return sorted(_REGISTRE)


# --- helpers ---------------------------------------------------------------

def _id_en_attente(valeur: Any) -> Optional[str]:
    """Vide ou `None` -> pas d'attente ; sinon un identifiant texte."""
    if valeur is None or valeur == "":
        return None
    if not isinstance(valeur, str):
        raise CommandeInvalide(f"en_attente: identifiant texte attendu, reçu {type(valeur).__name__}")
    return valeur


def _texte(commande: Mapping[str, Any], cle: str) -> str:
    v = commande.get(cle)
    if not isinstance(v, str) or not v:
        raise CommandeInvalide(f"{commande.get('type')}: argument {cle!r} (texte) requis")
    return v


def _entier(commande: Mapping[str, Any], cle: str) -> int:
    v = commande.get(cle)
    try:
        return int(v)
    except (TypeError, ValueError) as exc:
        raise CommandeInvalide(f"{commande.get('type')}: argument {cle!r} (entier) requis") from exc


def _borner(v: int, bornes: Optional[Tuple[int, int]]) -> int:
    if bornes is None:
        return v
    bas, haut = bornes
    return max(bas, min(haut, v))


def _avec_grille(ctx: ContexteCommande, grille) -> Resultat:
    if grille is ctx.etat.grille:
        return ctx.etat, ctx.en_attente
    return ctx.etat.evoluer(grille=grille), ctx.en_attente


# --- grille ----------------------------------------------------------------

@enregistrer("resize")
def _redimensionner(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    rangees = _borner(_entier(c, "rows"), ctx.bornes)
    colonnes = _borner(_entier(c, "cols"), ctx.bornes)
    return _avec_grille(ctx, redimensionner(ctx.etat.grille, rangees, colonnes))


@enregistrer("template")
def _gabarit(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    return _avec_grille(ctx, appliquer_gabarit(ctx.etat.grille, _texte(c, "template")))


@enregistrer("toggle_console")
def _console(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    return _avec_grille(ctx, basculer_console(ctx.etat.grille, _texte(c, "seat")))


@enregistrer("toggle_active")
def _activite(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    return _avec_grille(ctx, basculer_actif(ctx.etat.grille, _texte(c, "seat")))


@enregistrer("assign")
def _affecter(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    return _avec_grille(ctx, affecter(ctx.etat.grille, _texte(c, "seat"), _texte(c, "participant")))


@enregistrer("unassign")
def _liberer(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    return _avec_grille(ctx, liberer(ctx.etat.grille, _texte(c, "seat")))


@enregistrer("select")
def _selectionner(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    return ctx.etat, _id_en_attente(c.get("participant"))


@enregistrer("click")
def _cliquer(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    try:
        mode = Mode(c.get("mode", Mode.AFFECTATION.value))
        outil = Outil(c.get("tool", Outil.ACTIVITE.value))
    except ValueError as exc:
        raise CommandeInvalide(f"click: {exc}") from exc
    ctrl = ControleurPlacement(ctx.etat, mode=mode, outil=outil, en_attente=ctx.en_attente)
    etat = ctrl.cliquer(_texte(c, "seat"))
    return etat, ctrl.en_attente


# --- liste des participants ----------------------------------------------------------

@enregistrer("add_participant")
def _ajouter(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    brut = c.get("participant")
    if not isinstance(brut, dict):
        raise CommandeInvalide("add_participant: argument 'participant' (objet) requis")
    try:
        p = participant_depuis_dict({"id": nouvel_id(), **brut})
    except SauvegardeInvalide as exc:
        raise CommandeInvalide(str(exc)) from exc
    if any(q.id == p.id for q in ctx.etat.participants):
        raise CommandeInvalide(f"add_participant: identifiant déjà utilisé {p.id!r}")
    participants = ajouter_participant(ctx.etat.participants, p)
    if len(participants) == len(ctx.etat.participants):
        return ctx.etat, ctx.en_attente
    return ctx.etat.evoluer(participants=participants), ctx.en_attente


@enregistrer("update_participant")
def _modifier(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    valeur = c.get("value", "")
    try:
        participants = modifier_participant(ctx.etat.participants, _texte(c, "id"), _texte(c, "field"),
                                            str(valeur))
    except ValueError as exc:
        raise CommandeInvalide(f"update_participant: {exc}") from exc
    return ctx.etat.evoluer(participants=participants), ctx.en_attente


@enregistrer("remove_participant")
def _retirer(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    pid = _texte(c, "id")
    en_attente = None if ctx.en_attente == pid else ctx.en_attente
    return ctx.etat.evoluer(participants=retirer_participant(ctx.etat.participants, pid)), en_attente


@enregistrer("bulk_import")
def _import_groupe(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    nouveaux = analyser_texte_groupe(str(c.get("text") or ""))
    if not nouveaux:
        return ctx.etat, ctx.en_attente
    return ctx.etat.evoluer(participants=(*ctx.etat.participants, *nouveaux)), ctx.en_attente


# --- réunion et filtre -------------------------------------------------------

@enregistrer("update_info")
def _infos(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    champ = _texte(c, "field")
    brut = infos_vers_dict(ctx.etat.infos)
    if champ not in brut:
        raise CommandeInvalide(f"update_info: champ inconnu {champ!r}")
    brut[champ] = c.get("value")
    try:
        infos = infos_depuis_dict(brut)
    except SauvegardeInvalide as exc:
        raise CommandeInvalide(f"update_info: {exc}") from exc
    return ctx.etat.evoluer(infos=infos), ctx.en_attente


@enregistrer("set_filter")
def _filtre(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    unites = c.get("units")
    if unites is not None and not isinstance(unites, list):
        raise CommandeInvalide("set_filter: 'units' doit être une liste ou null")
    nouveau = None if unites is None else frozenset(str(u) for u in unites)
    return ctx.etat.evoluer(unites=nouveau), ctx.en_attente


@enregistrer("toggle_unit")
def _basculer_unite(c: Mapping[str, Any], ctx: ContexteCommande) -> Resultat:
    unites = basculer_unite(ctx.etat.unites, _texte(c, "unit"), ctx.etat.participants)
    return ctx.etat.evoluer(unites=unites), ctx.en_attente
