from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..etat import EtatReunion
from ..modele.page import Page
from ..modele.participant import Participant
from ..modele.reunion import InfosReunion
from ..modele.siege import Siege
from ..moteurs.affectation import occupant_de
from ..moteurs.pagination import LIGNES_PAR_PAGE, MARGE_FINALE, paginer


@dataclass(frozen=True)
class ModeleLivret:
    """Modèle de rendu du livret d'émargement.

    Construit une seule fois par cycle de rendu puis transmis tel quel à
    l'aperçu écran et au moteur de document.
    """

    infos: InfosReunion
    pages: Tuple[Page, ...]
    nb_viande: int
    nb_vegetarien: int

    @property
    def nb_pages(self) -> int:
        return len(self.pages)

    @property
    def libelle_unite(self) -> str:
        return self.infos.type_libelle_unite.libelle()

    def vers_dict(self) -> Dict[str, Any]:
        return {
            "page_count": self.nb_pages,
            "unit_label": self.libelle_unite,
            "show_dietary": self.infos.afficher_regime,
            "counts": {"meat": self.nb_viande, "vegetarian": self.nb_vegetarien},
            "pages": [
                {
                    "index": page.index,
                    "rows": [
                        None if ligne is None else {
                            "id": ligne.id,
                            "unit": ligne.unite,
                            "title": ligne.fonction,
                            "name": ligne.nom,
                            "note": ligne.remarque_affichee(self.infos.afficher_regime),
                        }
                        for ligne in page.lignes
                    ],
                }
                for page in self.pages
            ],
        }


@dataclass(frozen=True)
class CelluleSiege:
    """Un siège et son occupant résolu (`None` si libre ou référence pendante)."""

    siege: Siege
    occupant: Optional[Participant]


@dataclass(frozen=True)
class ModeleSieges:
    """Modèle de rendu du plan de salle, rangée par rangée."""

    rangees: int
    colonnes: int
    cellules: Tuple[Tuple[CelluleSiege, ...], ...]

    def vers_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rangees,
            "cols": self.colonnes,
            "cells": [
                [
                    {
                        "id": cel.siege.id,
                        "isActive": cel.siege.actif,
                        "type": cel.siege.type.value,
                        "occupant": None if cel.occupant is None else {
                            "id": cel.occupant.id,
                            "name": cel.occupant.nom,
                            "title": cel.occupant.fonction,
                        },
                    }
                    for cel in ligne
                ]
                for ligne in self.cellules
            ],
        }


def compter_regimes(participants: Sequence[Participant]) -> Tuple[int, int]:
    """(viande, végétarien) sur la liste donnée."""
    veg = sum(1 for p in participants if p.est_vegetarien())
    return len(participants) - veg, veg


def construire_modele_livret(
        etat: EtatReunion,
        taille_page: int = LIGNES_PAR_PAGE,
        marge_finale: int = MARGE_FINALE,
) -> ModeleLivret:
    """
    Filtre, pagine et compte sur *la même* liste : les totaux du pied de
    page correspondent toujours aux lignes visibles.
    """
    filtres: List[Participant] = etat.participants_filtres()
    viande, veg = compter_regimes(filtres)
    return ModeleLivret(
        infos=etat.infos,
        pages=paginer(filtres, taille_page, marge_finale),
        nb_viande=viande,
        nb_vegetarien=veg,
    )


def construire_modele_sieges(etat: EtatReunion) -> ModeleSieges:
    """Résout l'occupant de chaque siège sans jamais lever d'erreur."""
    index = etat.index_participants()
    grille = etat.grille
    return ModeleSieges(
        rangees=grille.rangees,
        colonnes=grille.colonnes,
        cellules=tuple(
            tuple(CelluleSiege(siege=s, occupant=occupant_de(s, index)) for s in grille.rangee(r))
            for r in range(grille.rangees)
        ),
    )
