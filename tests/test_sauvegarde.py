from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from emargement.etat import EtatReunion
from emargement.modele.participant import Regime
from emargement.modele.reunion import TypeLibelleUnite
from emargement.modele.siege import TypeSiege
from emargement.moteurs.affectation import affecter
from emargement.sauvegarde import (
    FORMAT_SAUVEGARDE,
    SauvegardeInvalide,
    charger_disposition,
    charger_sauvegarde,
    exporter_disposition,
    exporter_sauvegarde,
    vers_json,
)

DATA = Path(__file__).parent / "data"


def _sauvegarde() -> dict:
    return json.loads((DATA / "sauvegarde_min.json").read_text(encoding="utf-8"))


def test_charger_sauvegarde_complete():
    etat = charger_sauvegarde((DATA / "sauvegarde_min.json").read_bytes())
    assert etat.infos.titre_principal == "Comité de pilotage"
    assert etat.infos.afficher_regime is True
    assert [p.id for p in etat.participants] == ["p1", "p2", "p3", "p4"]
    assert etat.participants[1].regime is Regime.VEGETARIEN
    assert (etat.grille.rangees, etat.grille.colonnes) == (3, 4)
    assert etat.grille.siege(0, 3).type is TypeSiege.CONSOLE
    assert not etat.grille.siege(1, 1).actif
    # référence pendante tolérée
    assert etat.grille.siege(2, 3).participant_id == "ghost"
    assert etat.unites is None


def test_champs_absents_valeurs_par_defaut():
    data = {"meetingInfo": {"mainTitle": "AG"}, "participants": [{"id": "x"}]}
    base = EtatReunion()
    etat = charger_sauvegarde(data, base)
    assert etat.infos.nom_document == "Liste d'émargement"
    assert etat.infos.type_libelle_unite is TypeLibelleUnite.UNITE
    assert etat.participants[0].regime is Regime.VIANDE
    # sans seatingConfig, la grille courante est conservée
    assert etat.grille == base.grille


@pytest.mark.parametrize(
    "mutation",
    [
        lambda d: d.pop("participants"),
        lambda d: d.update(meetingInfo="texte"),
        lambda d: d["participants"].append({"id": "p1", "name": "doublon"}),
        lambda d: d["participants"][0].update(dietary="vegan"),
        lambda d: d["seatingConfig"]["seats"].pop(),
        lambda d: d["seatingConfig"]["seats"][4].update(participantId="p1"),
        lambda d: d["seatingConfig"]["seats"][0].update(row="0"),
        lambda d: d["seatingConfig"].update(rows=0),
        lambda d: d.update(version="99.0"),
        lambda d: d.update(version=[1]),
        lambda d: d.update(format="autre-chose"),
    ],
)
def test_sauvegarde_invalide_rejetee(mutation):
    data = _sauvegarde()
    mutation(data)
    with pytest.raises(SauvegardeInvalide):
        charger_sauvegarde(data)


def test_sauvegarde_sans_entete_acceptee():
    data = _sauvegarde()
    data.pop("format")
    data.pop("version")
    etat = charger_sauvegarde(data)
    assert [p.id for p in etat.participants] == ["p1", "p2", "p3", "p4"]


def test_json_illisible():
    with pytest.raises(SauvegardeInvalide):
        charger_sauvegarde(b"{pas du json")
    with pytest.raises(SauvegardeInvalide):
        charger_sauvegarde("[1, 2]")


def test_siege_inactif_normalise_a_l_import():
    data = _sauvegarde()
    data["seatingConfig"]["seats"][5].update(type="console", participantId="p4")
    etat = charger_sauvegarde(data)
    s = etat.grille.siege(1, 1)
    assert s.type is TypeSiege.STANDARD and s.participant_id is None


def test_export_puis_import_preserve_l_etat():
    etat = charger_sauvegarde(_sauvegarde())
    etat = etat.evoluer(unites=frozenset({"Direction"}))
    horodatage = datetime(2024, 3, 14, 9, 30, tzinfo=timezone.utc)
    data = exporter_sauvegarde(etat, horodatage)
    assert data["format"] == FORMAT_SAUVEGARDE
    assert data["timestamp"] == "2024-03-14T09:30:00+00:00"
    assert data["selectedUnits"] == ["Direction"]

    relu = charger_sauvegarde(vers_json(data))
    assert relu.infos == etat.infos
    assert relu.participants == etat.participants
    assert relu.grille == etat.grille
    assert relu.unites == etat.unites


def test_identifiants_de_siege_recalcules():
    data = _sauvegarde()
    data["seatingConfig"]["seats"][0]["id"] = "nimporte-quoi"
    etat = charger_sauvegarde(data)
    assert etat.grille.siege_par_id("seat-0-0").participant_id == "p1"


def test_disposition_sans_occupants():
    etat = charger_sauvegarde(_sauvegarde())
    data = exporter_disposition(etat.grille)
    assert data["type"] == "seating-layout"
    assert all("participantId" not in s for s in data["seats"])


def test_charger_disposition_ignore_les_occupants():
    base = charger_sauvegarde(_sauvegarde())
    etat = charger_disposition((DATA / "disposition_u.json").read_text(encoding="utf-8"), base)
    assert (etat.grille.rangees, etat.grille.colonnes) == (3, 3)
    assert etat.grille.ids_occupants() == set()
    assert etat.grille.siege(2, 1).est_console()
    assert etat.participants == base.participants


def test_disposition_mauvais_type():
    base = EtatReunion()
    with pytest.raises(SauvegardeInvalide):
        charger_disposition({"type": "autre", "rows": 1, "cols": 1, "seats": []}, base)


def test_grille_occupee_exportee():
    etat = EtatReunion()
    etat = etat.evoluer(grille=affecter(etat.grille, "seat-0-0", "x"))
    seats = exporter_sauvegarde(etat)["seatingConfig"]["seats"]
    assert len(seats) == 48
    assert seats[0] == {"id": "seat-0-0", "row": 0, "col": 0, "isActive": True, "type": "standard",
                        "participantId": "x"}
