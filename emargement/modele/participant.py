from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Regime(str, Enum):
    """Habitude alimentaire déclarée par un participant.

    Hérite de `str` pour une sérialisation JSON directe (valeur = nom stable).
    """

    VIANDE = "meat"
    VEGETARIEN = "vegetarian"


@dataclass(frozen=True)
class Participant:
    """Modélise une personne inscrite à la réunion.

    Attributs
    ---------
    id : str
        Identifiant unique dans la liste (clé référencée par les sièges).
    unite : str
        Unité ou service de rattachement (sert au filtrage).
    fonction : str
        Intitulé de poste.
    nom : str
        Nom affiché.
    remarque : str
        Remarque libre imprimée sur la ligne d'émargement.
    regime : Regime
        Viande ou végétarien.

    L'objet est immuable : une modification produit une nouvelle instance
    (voir `emargement.roster.modifier_participant`).
    """

    id: str
    unite: str = ""
    fonction: str = ""
    nom: str = ""
    remarque: str = ""
    regime: Regime = Regime.VIANDE

    def est_vegetarien(self) -> bool:
        """Retourne `True` si le participant est végétarien."""
        return self.regime is Regime.VEGETARIEN

    def remarque_affichee(self, afficher_regime: bool) -> str:
        """Remarque telle qu'imprimée, suffixée de « (végé) » si demandé."""
        if afficher_regime and self.est_vegetarien():
            return f"{self.remarque} (végé)" if self.remarque else "(végé)"
        return self.remarque

    def __str__(self) -> str:  # pragma: no cover - représentation
        return f"{self.nom} ({self.unite})"
