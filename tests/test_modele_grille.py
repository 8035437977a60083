from __future__ import annotations

import pytest

from emargement.modele.grille import GrilleSieges
from emargement.modele.invariants import GrilleIncoherente, anomalies_grille, assurer_grille_coherente
from emargement.modele.participant import Participant, Regime
from emargement.modele.siege import Siege, TypeSiege, id_siege


def test_grille_par_defaut_pleine():
    g = GrilleSieges.depuis_dimensions(6, 8)
    assert len(g) == 48
    assert all(s.actif and not s.est_occupe() and s.type is TypeSiege.STANDARD for s in g)


def test_id_siege_derive_des_coordonnees():
    assert id_siege(2, 5) == "seat-2-5"
    assert Siege(2, 5).id == "seat-2-5"


def test_ordre_rangee_puis_colonne():
    g = GrilleSieges.depuis_dimensions(2, 3)
    assert [s.coord for s in g.sieges()] == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


def test_grille_incomplete_ou_doublon_refusee():
    with pytest.raises(ValueError):
        GrilleSieges(1, 2, [Siege(0, 0)])
    with pytest.raises(ValueError):
        GrilleSieges(1, 2, [Siege(0, 0), Siege(0, 0), Siege(0, 1)])
    with pytest.raises(ValueError):
        GrilleSieges(1, 1, [Siege(0, 1)])


def test_remplacer_ne_modifie_pas_l_original():
    g = GrilleSieges.depuis_dimensions(2, 2)
    g2 = g.remplacer(Siege(0, 1, participant_id="p1"))
    assert g.siege(0, 1).participant_id is None
    assert g2.siege(0, 1).participant_id == "p1"
    assert g2.ids_occupants() == {"p1"}
    assert g != g2


def test_siege_par_id_inconnu():
    g = GrilleSieges.depuis_dimensions(2, 2)
    assert g.siege_par_id("seat-9-9") is None
    assert g.siege(5, 5) is None


def test_str_symboles():
    g = GrilleSieges.depuis_dimensions(1, 4).remplacer(
        Siege(0, 0, actif=False),
        Siege(0, 1, participant_id="p"),
        Siege(0, 2, type=TypeSiege.CONSOLE),
    )
    assert str(g) == ".#Co"


def test_anomalies_detectees():
    g = GrilleSieges.depuis_dimensions(1, 3).remplacer(
        Siege(0, 0, actif=False, participant_id="a"),
        Siege(0, 1, participant_id="b"),
        Siege(0, 2, participant_id="b"),
    )
    anomalies = anomalies_grille(g)
    assert len(anomalies) == 2
    with pytest.raises(GrilleIncoherente) as exc:
        assurer_grille_coherente(g)
    assert exc.value.anomalies == anomalies


def test_grille_coherente_retournee_telle_quelle():
    g = GrilleSieges.depuis_dimensions(2, 2)
    assert assurer_grille_coherente(g) is g


def test_remarque_affichee_suffixe_vege():
    p = Participant(id="x", nom="A", remarque="allergie", regime=Regime.VEGETARIEN)
    assert p.remarque_affichee(True) == "allergie (végé)"
    assert p.remarque_affichee(False) == "allergie"
    assert Participant(id="y", regime=Regime.VEGETARIEN).remarque_affichee(True) == "(végé)"
    assert Participant(id="z", remarque="r").remarque_affichee(True) == "r"
