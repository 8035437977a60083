import json
from pathlib import Path

import pytest
from django.test import Client

DATA = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def _force_celery_eager(settings):
    # Celery 5 names
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    settings.CELERY_TASK_STORE_EAGER_RESULT = True

    # In-memory broker & result backend for tests
    settings.CELERY_BROKER_URL = "memory://"
    settings.CELERY_RESULT_BACKEND = "cache+memory://"


def _sauvegarde() -> dict:
    return json.loads((DATA / "sauvegarde_min.json").read_text(encoding="utf-8"))


def _post(client: Client, url: str, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def _post_start(client: Client, payload: dict) -> str:
    r = _post(client, "/emargement/export/start", payload)
    assert r.status_code == 200, r.content
    task_id = r.json()["task_id"]
    assert isinstance(task_id, str)
    return task_id


def _get_status(client: Client, task_id: str) -> dict:
    r = client.get(f"/emargement/export/status/{task_id}")
    assert r.status_code == 200
    return r.json()


def test_sante(client):
    r = client.get("/emargement/sante")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_etat_initial(client):
    etat = client.get("/emargement/etat").json()["etat"]
    assert etat["seatingConfig"]["rows"] == 6
    assert etat["seatingConfig"]["cols"] == 8
    assert etat["participants"] == []
    assert etat["revision"] == 0


def test_commande_assign_puis_unseated(client):
    payload = {"etat": _sauvegarde(), "commande": {"type": "assign", "seat": "seat-2-0", "participant": "p4"}}
    r = _post(client, "/emargement/commande", payload)
    assert r.status_code == 200, r.content
    etat = r.json()["etat"]
    seat = next(s for s in etat["seatingConfig"]["seats"] if s["id"] == "seat-2-0")
    assert seat["participantId"] == "p4"
    assert etat["unseated"] == []
    assert etat["units"] == ["Direction", "Informatique", "Logistique"]


def test_commande_resize_bornee(client):
    payload = {"etat": _sauvegarde(), "commande": {"type": "resize", "rows": 99, "cols": 1}}
    etat = _post(client, "/emargement/commande", payload).json()["etat"]
    assert (etat["seatingConfig"]["rows"], etat["seatingConfig"]["cols"]) == (15, 3)


def test_commande_select_click(client):
    sauvegarde = _sauvegarde()
    r = _post(client, "/emargement/commande", {"etat": sauvegarde, "commande": {"type": "select", "participant": "p4"}})
    assert r.json()["en_attente"] == "p4"
    r = _post(client, "/emargement/commande", {
        "etat": r.json()["etat"], "en_attente": "p4", "commande": {"type": "click", "seat": "seat-1-0"},
    })
    data = r.json()
    assert data["en_attente"] is None
    assert "p4" not in [p["id"] for p in data["etat"]["unseated"]]


def test_commande_invalide_400(client):
    r = _post(client, "/emargement/commande", {"etat": _sauvegarde(), "commande": {"type": "explode"}})
    assert r.status_code == 400
    r = _post(client, "/emargement/commande", {"commande": {"type": "resize", "rows": 3, "cols": 3}})
    assert r.status_code == 400
    r = client.post("/emargement/commande", data=b"{oops", content_type="application/json")
    assert r.status_code == 400


def test_apercu_livret(client):
    data = _post(client, "/emargement/apercu/livret", {"etat": _sauvegarde()}).json()
    assert data["page_count"] == 1
    assert len(data["svg"]) == 1
    assert "Total : viande 2, végétarien 2" in data["svg"][0]


def test_apercu_sieges(client):
    data = _post(client, "/emargement/apercu/sieges", {"etat": _sauvegarde()}).json()
    assert data["cells"][0][0]["occupant"]["name"] == "MARTIN Claire"
    assert data["cells"][2][3]["occupant"] is None
    assert data["svg"].startswith("<svg")


def test_sauvegarde_export_import(client):
    r = _post(client, "/emargement/sauvegarde/export", {"etat": _sauvegarde()})
    assert r.status_code == 200
    assert r["Content-Disposition"].startswith('attachment; filename="20240314_')
    r2 = client.post("/emargement/sauvegarde/import", data=r.content, content_type="application/json")
    assert r2.status_code == 200
    assert [p["id"] for p in r2.json()["etat"]["participants"]] == ["p1", "p2", "p3", "p4"]


def test_sauvegarde_import_invalide(client):
    r = client.post("/emargement/sauvegarde/import", data=b'{"participants": []}', content_type="application/json")
    assert r.status_code == 400
    assert "invalide" in r.json()["error"]


def test_disposition_export_import(client):
    r = _post(client, "/emargement/disposition/export", {"etat": _sauvegarde()})
    assert r.status_code == 200
    assert r["Content-Disposition"].endswith('.disposition.json"')
    disposition = json.loads(r.content)
    assert disposition["type"] == "seating-layout"

    layout = json.loads((DATA / "disposition_u.json").read_text(encoding="utf-8"))
    r = _post(client, "/emargement/disposition/import", {"etat": _sauvegarde(), "disposition": layout})
    assert r.status_code == 200
    etat = r.json()["etat"]
    assert etat["seatingConfig"]["rows"] == 3
    assert all(s["participantId"] is None for s in etat["seatingConfig"]["seats"])
    assert len(etat["unseated"]) == 4

    r = _post(client, "/emargement/disposition/import", {"etat": _sauvegarde(), "disposition": {"type": "x"}})
    assert r.status_code == 400


def test_export_end_to_end(client):
    task_id = _post_start(client, {"etat": _sauvegarde()})
    data = _get_status(client, task_id)
    assert data.get("status") == "SUCCESS", data
    assert data["filename"].endswith(".zip")
    assert "livret_p01_svg" in data["formats"]

    r = client.get(data["download"]["zip"])
    assert r.status_code == 200
    assert r["Content-Type"] == "application/zip"
    assert r["Content-Disposition"] == f'attachment; filename="{data["filename"]}"'

    r = client.get(data["download"]["livret_p01_svg"])
    assert r["Content-Type"] == "image/svg+xml"
    assert b"Page 1 / 1" in r.content


def test_export_sauvegarde_invalide(client):
    task_id = _post_start(client, {"etat": {"participants": []}})
    data = _get_status(client, task_id)
    assert data["status"] == "FAILURE"


def test_download_expire(client):
    r = client.get("/emargement/download/inconnu/zip")
    assert r.status_code == 404


def test_commande_en_attente_invalide_400(client):
    payload = {"etat": _sauvegarde(), "commande": {"type": "click", "seat": "seat-0-0"}, "en_attente": {"x": 1}}
    r = _post(client, "/emargement/commande", payload)
    assert r.status_code == 400
    assert "en_attente" in r.json()["error"]
