from __future__ import annotations

from emargement.modele.grille import GrilleSieges
from emargement.modele.invariants import anomalies_grille
from emargement.modele.siege import Siege, TypeSiege
from emargement.moteurs.disposition import (
    appliquer_gabarit,
    basculer_actif,
    basculer_console,
    redimensionner,
)


def test_redimensionner_conserve_les_cases_communes():
    g = GrilleSieges.depuis_dimensions(3, 3).remplacer(
        Siege(0, 0, participant_id="a"),
        Siege(1, 1, actif=False),
        Siege(0, 2, type=TypeSiege.CONSOLE),
    )
    g2 = redimensionner(g, 4, 5)
    assert (g2.rangees, g2.colonnes) == (4, 5)
    assert g2.siege(0, 0).participant_id == "a"
    assert not g2.siege(1, 1).actif
    assert g2.siege(0, 2).est_console()
    # nouvelle case : active, standard, libre
    nouvelle = g2.siege(3, 4)
    assert nouvelle.actif and nouvelle.type is TypeSiege.STANDARD and nouvelle.participant_id is None


def test_redimensionner_reduit_perd_les_occupants_hors_bornes():
    g = GrilleSieges.depuis_dimensions(4, 4).remplacer(
        Siege(3, 3, participant_id="loin"),
        Siege(0, 0, participant_id="pres"),
    )
    g2 = redimensionner(g, 3, 3)
    assert g2.ids_occupants() == {"pres"}
    assert len(g2) == 9


def test_gabarit_retire_occupant_des_sieges_desactives():
    g = GrilleSieges.depuis_dimensions(3, 3).remplacer(
        Siege(1, 1, participant_id="centre"),
        Siege(0, 0, participant_id="coin", type=TypeSiege.CONSOLE),
    )
    g2 = appliquer_gabarit(g, "hollow")
    assert g2.siege(1, 1).participant_id is None
    assert g2.siege(0, 0).participant_id == "coin"
    # toute désignation de régie est effacée
    assert not any(s.est_console() for s in g2)
    assert anomalies_grille(g2) == []


def test_basculer_console_aller_retour():
    g = GrilleSieges.depuis_dimensions(2, 2)
    g1 = basculer_console(g, "seat-0-1")
    assert g1.siege(0, 1).est_console()
    g2 = basculer_console(g1, "seat-0-1")
    assert g2.siege(0, 1).type is TypeSiege.STANDARD


def test_basculer_console_garde_l_operateur():
    g = GrilleSieges.depuis_dimensions(2, 2).remplacer(Siege(0, 0, participant_id="op"))
    g1 = basculer_console(g, "seat-0-0")
    assert g1.siege(0, 0).est_console()
    assert g1.siege(0, 0).participant_id == "op"


def test_basculer_console_sans_effet_sur_inactif_ou_inconnu():
    g = basculer_actif(GrilleSieges.depuis_dimensions(2, 2), "seat-1-1")
    assert basculer_console(g, "seat-1-1") is g
    assert basculer_console(g, "seat-7-7") is g


def test_desactiver_libere_et_remet_standard():
    g = GrilleSieges.depuis_dimensions(2, 2).remplacer(
        Siege(0, 0, participant_id="p", type=TypeSiege.CONSOLE)
    )
    g1 = basculer_actif(g, "seat-0-0")
    s = g1.siege(0, 0)
    assert not s.actif and s.participant_id is None and s.type is TypeSiege.STANDARD
    g2 = basculer_actif(g1, "seat-0-0")
    assert g2.siege(0, 0).actif
    assert g2.siege(0, 0).participant_id is None


def test_redimensionner_grille_complete_pour_toute_dimension():
    g = GrilleSieges.depuis_dimensions(6, 8)
    for rangees in range(1, 9):
        for colonnes in range(1, 9):
            g2 = redimensionner(g, rangees, colonnes)
            coords = [s.coord for s in g2]
            assert len(coords) == rangees * colonnes
            assert set(coords) == {(r, c) for r in range(rangees) for c in range(colonnes)}


def test_redimensionner_memes_dimensions_identite():
    g = GrilleSieges.depuis_dimensions(3, 4).remplacer(Siege(0, 0, participant_id="a"))
    assert redimensionner(g, 3, 4) is g


def test_gabarit_sans_effet_retourne_la_meme_grille():
    g = appliquer_gabarit(GrilleSieges.depuis_dimensions(4, 5), "u_single")
    assert appliquer_gabarit(g, "u_single") is g
    plein = GrilleSieges.depuis_dimensions(4, 5)
    assert appliquer_gabarit(plein, "full") is plein
    # une régie repasse en standard : la grille change
    avec_regie = plein.remplacer(Siege(0, 0, type=TypeSiege.CONSOLE))
    assert appliquer_gabarit(avec_regie, "full") is not avec_regie
