from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from ..modele.grille import GrilleSieges
from ..modele.siege import Siege, TypeSiege
from .gabarits import predicat_de

logger = logging.getLogger(__name__)


def redimensionner(grille: GrilleSieges, rangees: int, colonnes: int) -> GrilleSieges:
    """
    Construit une grille `rangees` x `colonnes` à partir de `grille`.

    - Une case déjà présente est reprise telle quelle (activité, type, occupant).
    - Une case nouvelle reçoit un siège actif, standard et libre.
    - Les cases hors des nouvelles bornes disparaissent avec leur occupant :
      aucun replacement n'est tenté.

    Les bornes ne sont pas vérifiées ici : c'est à l'appelant de fournir des
    dimensions raisonnables (voir `emargement.views`). Mêmes dimensions :
    `grille` est retournée telle quelle.
    """
    if (rangees, colonnes) == (grille.rangees, grille.colonnes):
        return grille

    nouveaux: List[Siege] = []
    for r in range(rangees):
        for c in range(colonnes):
            existant = grille.siege(r, c)
            nouveaux.append(existant if existant is not None else Siege(rangee=r, colonne=c))

    perdus = [
        s.id for s in grille.sieges()
        if s.participant_id is not None and not (s.rangee < rangees and s.colonne < colonnes)
    ]
    if perdus:
        logger.info("Redimensionnement %sx%s : %d placement(s) perdu(s) (%s)",
                    rangees, colonnes, len(perdus), ", ".join(perdus))

    return GrilleSieges(rangees, colonnes, nouveaux)


def appliquer_gabarit(grille: GrilleSieges, nom_gabarit: str) -> GrilleSieges:
    """
    Recalcule l'activité de chaque siège selon le gabarit `nom_gabarit`.

    Tous les sièges repassent en type standard ; un siège devenu inactif
    perd son occupant (qui n'est pas replacé). Un gabarit inconnu, ou sans
    effet, retourne `grille` elle-même.
    """
    predicat = predicat_de(nom_gabarit)
    if predicat is None:
        logger.debug("Gabarit inconnu ignoré: %r", nom_gabarit)
        return grille

    nb_r, nb_c = grille.rangees, grille.colonnes
    nouveaux: List[Siege] = []
    for s in grille.sieges():
        actif = bool(predicat(s.rangee, s.colonne, nb_r, nb_c))
        nouveaux.append(replace(
            s,
            actif=actif,
            type=TypeSiege.STANDARD,
            participant_id=s.participant_id if actif else None,
        ))
    resultat = GrilleSieges(nb_r, nb_c, nouveaux)
    return grille if resultat == grille else resultat


def basculer_console(grille: GrilleSieges, seat_id: str) -> GrilleSieges:
    """
    Alterne standard <-> régie sur le siège `seat_id`.

    Un siège passé en régie est forcé actif ; l'occupant éventuel (un
    opérateur) est conservé. Sans effet sur un siège inactif ou inconnu.
    """
    s = grille.siege_par_id(seat_id)
    if s is None or not s.actif:
        logger.debug("Bascule régie ignorée sur %r", seat_id)
        return grille

    if s.est_console():
        return grille.remplacer(replace(s, type=TypeSiege.STANDARD))
    return grille.remplacer(replace(s, type=TypeSiege.CONSOLE, actif=True))


def basculer_actif(grille: GrilleSieges, seat_id: str) -> GrilleSieges:
    """
    Alterne actif <-> inactif sur le siège `seat_id`.

    En devenant inactif, le siège repasse en standard et perd son occupant.
    """
    s = grille.siege_par_id(seat_id)
    if s is None:
        logger.debug("Bascule d'activité ignorée: siège inconnu %r", seat_id)
        return grille

    if s.actif:
        return grille.remplacer(replace(s, actif=False, type=TypeSiege.STANDARD, participant_id=None))
    return grille.remplacer(replace(s, actif=True))
