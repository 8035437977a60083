from __future__ import annotations

from emargement.modele.participant import Participant
from emargement.moteurs.filtre import basculer_unite, filtrer_participants, unites_distinctes

PARTICIPANTS = [
    Participant(id="a", unite="Direction", nom="A"),
    Participant(id="b", unite="Informatique", nom="B"),
    Participant(id="c", unite="Direction", nom="C"),
    Participant(id="d", unite="", nom="D"),
]


def test_unites_distinctes_ordre_apparition():
    assert unites_distinctes(PARTICIPANTS) == ["Direction", "Informatique"]


def test_filtre_non_pose_garde_tout():
    assert filtrer_participants(PARTICIPANTS, None) == PARTICIPANTS


def test_filtre_vide_ne_garde_rien():
    assert filtrer_participants(PARTICIPANTS, set()) == []


def test_filtre_conserve_l_ordre():
    assert [p.id for p in filtrer_participants(PARTICIPANTS, {"Direction"})] == ["a", "c"]


def test_basculer_unite_depuis_filtre_non_pose():
    assert basculer_unite(None, "Direction", PARTICIPANTS) == frozenset({"Informatique"})


def test_basculer_unite_ajoute_puis_retire():
    unites = basculer_unite(frozenset(), "Informatique", PARTICIPANTS)
    assert unites == frozenset({"Informatique"})
    assert basculer_unite(unites, "Informatique", PARTICIPANTS) == frozenset()
