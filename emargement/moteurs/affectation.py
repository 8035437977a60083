from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from ..modele.grille import GrilleSieges
from ..modele.participant import Participant
from ..modele.siege import Siege

logger = logging.getLogger(__name__)


def affecter(grille: GrilleSieges, seat_id: str, participant_id: str) -> GrilleSieges:
    """
    Place `participant_id` sur le siège `seat_id`.

    - Sans effet si le siège est inactif ou inconnu.
    - Le participant quitte d'abord tout autre siège (un seul siège par personne).
    - L'occupant précédent du siège cible est simplement libéré, pas déplacé.
    """
    cible = grille.siege_par_id(seat_id)
    if cible is None or not cible.actif:
        logger.debug("Affectation ignorée: siège %r absent ou inactif", seat_id)
        return grille

    modifies: List[Siege] = [
        replace(s, participant_id=None)
        for s in grille.sieges()
        if s.participant_id == participant_id and s.coord != cible.coord
    ]
    modifies.append(replace(cible, participant_id=participant_id))
    return grille.remplacer(*modifies)


def liberer(grille: GrilleSieges, seat_id: str) -> GrilleSieges:
    """Vide le siège `seat_id` (sans effet s'il est déjà libre ou inconnu)."""
    s = grille.siege_par_id(seat_id)
    if s is None or s.participant_id is None:
        return grille
    return grille.remplacer(replace(s, participant_id=None))


def participants_non_places(participants: Sequence[Participant], grille: GrilleSieges) -> List[Participant]:
    """
    Participants dont l'identifiant n'apparaît sur aucun siège.

    Recalculé intégralement à chaque appel ; l'ordre de la liste est conservé.
    """
    places = grille.ids_occupants()
    return [p for p in participants if p.id not in places]


def occupant_de(siege: Siege, index: Dict[str, Participant]) -> Optional[Participant]:
    """
    Résout l'occupant d'un siège.

    Un siège inactif, libre, ou pointant vers un participant disparu de la
    liste est rendu comme vide.
    """
    if not siege.actif or siege.participant_id is None:
        return None
    return index.get(siege.participant_id)
