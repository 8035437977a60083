from __future__ import annotations

from typing import Collection, List, Optional, Sequence

from ..modele.participant import Participant


def unites_distinctes(participants: Sequence[Participant]) -> List[str]:
    """Unités non vides, dans l'ordre de première apparition."""
    vues: List[str] = []
    for p in participants:
        if p.unite and p.unite not in vues:
            vues.append(p.unite)
    return vues


def filtrer_participants(
        participants: Sequence[Participant],
        unites: Optional[Collection[str]],
) -> List[Participant]:
    """
    Garde les participants dont l'unité est autorisée.

    `unites=None` signifie « filtre non posé » (tout le monde) ; un ensemble
    vide donne une liste vide. L'ordre relatif est conservé.
    """
    if unites is None:
        return list(participants)
    autorisees = set(unites)
    return [p for p in participants if p.unite in autorisees]


def basculer_unite(
        unites: Optional[Collection[str]],
        unite: str,
        participants: Sequence[Participant],
) -> frozenset[str]:
    """
    Ajoute ou retire `unite` du filtre.

    Un filtre non posé vaut « toutes les unités » : il est d'abord
    matérialisé avant la bascule.
    """
    courantes = set(unites_distinctes(participants) if unites is None else unites)
    if unite in courantes:
        courantes.discard(unite)
    else:
        courantes.add(unite)
    return frozenset(courantes)
