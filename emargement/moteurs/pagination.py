from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from ..modele.page import Ligne, Page
from ..modele.participant import Participant

LIGNES_PAR_PAGE: int = 10
MARGE_FINALE: int = 3


def nombre_pages(n: int, taille_page: int = LIGNES_PAR_PAGE, marge_finale: int = MARGE_FINALE) -> int:
    """
    Nombre de pages du livret pour `n` participants.

    On réserve au moins `marge_finale` lignes vierges après le dernier
    inscrit (retardataires), et au moins une page complète.
    """
    if taille_page <= 0:
        raise ValueError(f"taille_page doit être > 0 (reçu {taille_page})")
    if marge_finale < 0:
        raise ValueError(f"marge_finale doit être >= 0 (reçu {marge_finale})")
    lignes_necessaires: int = max(n + marge_finale, taille_page)
    return max(1, math.ceil(lignes_necessaires / taille_page))


def paginer(
        participants: Sequence[Participant],
        taille_page: int = LIGNES_PAR_PAGE,
        marge_finale: int = MARGE_FINALE,
) -> Tuple[Page, ...]:
    """
    Découpe la liste (déjà filtrée et ordonnée) en pages de `taille_page` lignes.

    Chaque page est complétée à droite par des lignes vierges (`None`).
    Le découpage ne dépend que de la longueur et de l'ordre de la liste :
    l'aperçu écran et l'export document doivent tous deux passer par ici.
    """
    total: int = nombre_pages(len(participants), taille_page, marge_finale)
    pages: List[Page] = []
    for index in range(total):
        debut: int = index * taille_page
        tranche: List[Ligne] = list(participants[debut:debut + taille_page])
        tranche.extend([None] * (taille_page - len(tranche)))
        pages.append(Page(index=index, lignes=tuple(tranche)))
    return tuple(pages)
