from __future__ import annotations

from emargement.controleur import ControleurPlacement, Mode, Outil
from emargement.etat import EtatReunion, Historique
from emargement.modele.grille import GrilleSieges
from emargement.modele.participant import Participant


def _etat() -> EtatReunion:
    return EtatReunion(
        participants=(Participant(id="a", nom="A"), Participant(id="b", nom="B")),
        grille=GrilleSieges.depuis_dimensions(2, 3),
    )


def test_etat_par_defaut():
    etat = EtatReunion()
    assert (etat.grille.rangees, etat.grille.colonnes) == (6, 8)
    assert etat.revision == 0
    assert etat.unites is None


def test_evoluer_incremente_la_revision():
    etat = _etat()
    suivant = etat.evoluer(unites=frozenset())
    assert suivant.revision == etat.revision + 1
    assert etat.unites is None


def test_clic_avec_participant_en_attente():
    ctrl = ControleurPlacement(_etat())
    ctrl.selectionner("a")
    etat = ctrl.cliquer("seat-0-1")
    assert etat.grille.siege(0, 1).participant_id == "a"
    assert ctrl.en_attente is None


def test_clic_sans_attente_libere_le_siege():
    ctrl = ControleurPlacement(_etat(), en_attente="b")
    ctrl.cliquer("seat-1-1")
    etat = ctrl.cliquer("seat-1-1")
    assert etat.grille.siege(1, 1).participant_id is None


def test_clic_siege_inactif_ignore_et_garde_l_attente():
    ctrl = ControleurPlacement(_etat(), mode=Mode.DISPOSITION)
    ctrl.cliquer("seat-0-0")
    ctrl.mode = Mode.AFFECTATION
    ctrl.selectionner("a")
    avant = ctrl.etat
    assert ctrl.cliquer("seat-0-0") is avant
    assert ctrl.en_attente == "a"


def test_mode_disposition_outils():
    ctrl = ControleurPlacement(_etat(), mode=Mode.DISPOSITION, outil=Outil.CONSOLE)
    etat = ctrl.cliquer("seat-0-2")
    assert etat.grille.siege(0, 2).est_console()
    ctrl.outil = Outil.ACTIVITE
    etat = ctrl.cliquer("seat-0-2")
    assert not etat.grille.siege(0, 2).actif


def test_annuler_retablir():
    ctrl = ControleurPlacement(_etat(), en_attente="a")
    initial = ctrl.etat
    place = ctrl.cliquer("seat-0-0")
    assert ctrl.historique.peut_annuler()
    assert ctrl.annuler() is initial
    assert ctrl.retablir() is place
    assert not ctrl.historique.peut_retablir()


def test_historique_pousser_vide_le_futur_et_borne_le_passe():
    etat = _etat()
    h = Historique(etat, limite=2)
    for _ in range(4):
        h.pousser(h.courant.evoluer())
    assert h.courant.revision == etat.revision + 4
    h.annuler()
    h.annuler()
    assert not h.peut_annuler()
    h.pousser(h.courant.evoluer())
    assert not h.peut_retablir()
    assert h.pousser(h.courant) is h.courant
