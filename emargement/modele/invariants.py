from __future__ import annotations

from typing import Dict, List

from .grille import GrilleSieges
from .siege import TypeSiege


class GrilleIncoherente(ValueError):
    """Levée quand une grille viole un invariant de placement."""

    def __init__(self, anomalies: List[str]) -> None:
        super().__init__("; ".join(anomalies))
        self.anomalies: List[str] = anomalies


def anomalies_grille(grille: GrilleSieges) -> List[str]:
    """
    Liste les violations d'invariants de la grille (liste vide si cohérente).

    Vérifie :
    - qu'un participant n'occupe qu'un seul siège ;
    - qu'un siège inactif n'a ni occupant ni type « console » ;
    - qu'un siège « console » est actif.

    L'invariant de structure (une case par coordonnée) est garanti par le
    constructeur de `GrilleSieges`.
    """
    anomalies: List[str] = []
    vus: Dict[str, str] = {}

    for s in grille.sieges():
        if not s.actif and s.participant_id is not None:
            anomalies.append(f"{s.id}: siège inactif occupé par {s.participant_id!r}")
        if not s.actif and s.type is not TypeSiege.STANDARD:
            anomalies.append(f"{s.id}: siège inactif de type {s.type.value!r}")
        if s.participant_id is not None:
            deja = vus.get(s.participant_id)
            if deja is not None:
                anomalies.append(f"{s.participant_id!r} placé à la fois en {deja} et {s.id}")
            else:
                vus[s.participant_id] = s.id
    return anomalies


def assurer_grille_coherente(grille: GrilleSieges) -> GrilleSieges:
    """Retourne `grille` inchangée, ou lève `GrilleIncoherente`."""
    anomalies = anomalies_grille(grille)
    if anomalies:
        raise GrilleIncoherente(anomalies)
    return grille
