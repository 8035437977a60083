from __future__ import annotations

from enum import Enum
from typing import Optional

from .etat import EtatReunion, Historique
from .moteurs.affectation import affecter, liberer
from .moteurs.disposition import basculer_actif, basculer_console


class Mode(str, Enum):
    AFFECTATION = "assign"
    DISPOSITION = "layout"


class Outil(str, Enum):
    ACTIVITE = "toggle"
    CONSOLE = "console"


class ControleurPlacement:
    """Protocole de clic sur le plan de salle.

    Le contrôleur détient l'unique référence au « participant en attente »,
    consommée par le prochain clic sur un siège :

    - mode affectation, participant en attente : `affecter` puis l'attente est levée ;
    - mode affectation, rien en attente, siège occupé : `liberer` ;
    - mode affectation, siège inactif : rien ;
    - mode disposition : bascule d'activité ou de régie selon l'outil.

    Chaque état accepté est poussé dans l'`Historique` (annuler / rétablir).
    """

    def __init__(
            self,
            etat: EtatReunion,
            mode: Mode = Mode.AFFECTATION,
            outil: Outil = Outil.ACTIVITE,
            en_attente: Optional[str] = None,
    ) -> None:
        self.historique: Historique = Historique(etat)
        self.mode: Mode = mode
        self.outil: Outil = outil
        self.en_attente: Optional[str] = en_attente

    @property
    def etat(self) -> EtatReunion:
        return self.historique.courant

    def selectionner(self, participant_id: Optional[str]) -> None:
        """Désigne le participant à placer au prochain clic (`None` pour annuler)."""
        self.en_attente = participant_id

    def cliquer(self, seat_id: str) -> EtatReunion:
        etat = self.etat
        grille = etat.grille

        if self.mode is Mode.DISPOSITION:
            if self.outil is Outil.CONSOLE:
                grille = basculer_console(grille, seat_id)
            else:
                grille = basculer_actif(grille, seat_id)
        else:
            siege = grille.siege_par_id(seat_id)
            if siege is None or not siege.actif:
                return etat
            if self.en_attente is not None:
                grille = affecter(grille, seat_id, self.en_attente)
                self.en_attente = None
            elif siege.est_occupe():
                grille = liberer(grille, seat_id)

        if grille is etat.grille:
            return etat
        return self.historique.pousser(etat.evoluer(grille=grille))

    def annuler(self) -> EtatReunion:
        return self.historique.annuler()

    def retablir(self) -> EtatReunion:
        return self.historique.retablir()
