from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .modele.grille import GrilleSieges
from .modele.participant import Participant
from .modele.reunion import InfosReunion
from .moteurs.filtre import filtrer_participants

RANGEES_DEFAUT: int = 6
COLONNES_DEFAUT: int = 8


@dataclass(frozen=True)
class EtatReunion:
    """
    État complet d'une réunion, détenu par un seul contrôleur.

    Attributs
    ---------
    revision : int
        Compteur incrémenté à chaque modification acceptée.
    infos : InfosReunion
        Métadonnées imprimées sur le livret.
    participants : Tuple[Participant, ...]
        Liste ordonnée des inscrits.
    grille : GrilleSieges
        Géométrie et occupation de la salle.
    unites : Optional[frozenset[str]]
        Filtre d'impression ; `None` = filtre non posé (toutes les unités).

    Chaque opération retourne un nouvel état (`evoluer`) : aucune mutation en
    place, donc pas d'alias caché entre l'aperçu et l'export.
    """

    revision: int = 0
    infos: InfosReunion = field(default_factory=InfosReunion)
    participants: Tuple[Participant, ...] = ()
    grille: GrilleSieges = field(default_factory=lambda: GrilleSieges.depuis_dimensions(RANGEES_DEFAUT, COLONNES_DEFAUT))
    unites: Optional[frozenset[str]] = None

    def evoluer(self, **changements: Any) -> "EtatReunion":
        """Retourne un nouvel état avec `changements` et la révision suivante."""
        return replace(self, revision=self.revision + 1, **changements)

    def participants_filtres(self) -> list[Participant]:
        """Liste filtrée par unité, base commune de l'aperçu et de l'export."""
        return filtrer_participants(self.participants, self.unites)

    def index_participants(self) -> Dict[str, Participant]:
        return {p.id: p for p in self.participants}


class Historique:
    """Pile annuler / rétablir d'instantanés `EtatReunion`.

    `limite` borne le nombre d'états conservés côté passé.
    """

    def __init__(self, initial: EtatReunion, limite: int = 100) -> None:
        self._courant: EtatReunion = initial
        self._passe: List[EtatReunion] = []
        self._futur: List[EtatReunion] = []
        self._limite: int = limite

    @property
    def courant(self) -> EtatReunion:
        return self._courant

    def pousser(self, nouvel_etat: EtatReunion) -> EtatReunion:
        """Enregistre `nouvel_etat` ; vide la pile « rétablir »."""
        if nouvel_etat is self._courant:
            return self._courant
        self._passe.append(self._courant)
        if len(self._passe) > self._limite:
            self._passe.pop(0)
        self._futur.clear()
        self._courant = nouvel_etat
        return self._courant

    def peut_annuler(self) -> bool:
        return bool(self._passe)

    def peut_retablir(self) -> bool:
        return bool(self._futur)

    def annuler(self) -> EtatReunion:
        if self._passe:
            self._futur.append(self._courant)
            self._courant = self._passe.pop()
        return self._courant

    def retablir(self) -> EtatReunion:
        if self._futur:
            self._passe.append(self._courant)
            self._courant = self._futur.pop()
        return self._courant
