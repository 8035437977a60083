from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TypeSiege(str, Enum):
    """Nature d'un siège : place ordinaire ou poste de régie."""

    STANDARD = "standard"
    CONSOLE = "console"


def id_siege(rangee: int, colonne: int) -> str:
    """Identifiant stable dérivé des coordonnées (ex. « seat-2-5 »)."""
    return f"seat-{rangee}-{colonne}"


@dataclass(frozen=True)
class Siege:
    """Représente une case de la grille de la salle.

    Attributs
    ---------
    rangee : int
        Rangée, 0 côté écran.
    colonne : int
        Colonne, de gauche à droite (0-indexé).
    actif : bool
        `False` pour un emplacement vide (pas de siège physique).
    type : TypeSiege
        Standard ou régie.
    participant_id : Optional[str]
        Occupant éventuel (référence vers `Participant.id`).

    L'identité d'un siège est le couple (rangee, colonne) ; la classe est
    immuable pour que chaque modification produise une nouvelle grille.
    """

    rangee: int
    colonne: int
    actif: bool = True
    type: TypeSiege = TypeSiege.STANDARD
    participant_id: Optional[str] = None

    @property
    def id(self) -> str:
        return id_siege(self.rangee, self.colonne)

    @property
    def coord(self) -> tuple[int, int]:
        return self.rangee, self.colonne

    def est_console(self) -> bool:
        return self.type is TypeSiege.CONSOLE

    def est_occupe(self) -> bool:
        return self.participant_id is not None
