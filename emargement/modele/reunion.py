from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TypeLibelleUnite(str, Enum):
    """Libellé de la colonne d'appartenance sur le livret."""

    UNITE = "unit"
    SERVICE = "department"

    def libelle(self) -> str:
        return "Unité" if self is TypeLibelleUnite.UNITE else "Service"


@dataclass(frozen=True)
class InfosReunion:
    """Métadonnées de la réunion imprimées en tête de chaque page.

    `horaire` est conservé tel que saisi (chaîne ISO `YYYY-MM-DDTHH:MM` en
    général) ; les rendus le reformatent s'il est lisible.
    """

    organisateur: str = ""
    titre_principal: str = ""
    sous_titre: str = ""
    nom_document: str = "Liste d'émargement"
    horaire: str = ""
    lieu: str = ""
    president: str = ""
    secretaire: str = ""
    afficher_regime: bool = True
    type_libelle_unite: TypeLibelleUnite = TypeLibelleUnite.UNITE
