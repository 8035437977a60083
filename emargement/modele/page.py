from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .participant import Participant

# Une ligne du livret : un participant, ou `None` pour une ligne vierge.
Ligne = Optional[Participant]


@dataclass(frozen=True)
class Page:
    """Page du livret d'émargement, dérivée et jamais stockée.

    Attributs
    ---------
    index : int
        Rang de la page (0-indexé).
    lignes : Tuple[Ligne, ...]
        Exactement `taille_page` lignes, les vierges en fin de page.
    """

    index: int
    lignes: Tuple[Ligne, ...]

    def remplies(self) -> int:
        """Nombre de lignes portant un participant."""
        return sum(1 for ligne in self.lignes if ligne is not None)

    def vides(self) -> int:
        """Nombre de lignes vierges (à remplir à la main)."""
        return len(self.lignes) - self.remplies()
