# comments in English
from django.urls import reverse


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.content == b"ok"


def test_routes_nommees():
    assert reverse("emargement:sante") == "/emargement/sante"
    assert reverse("emargement:download_artifact", kwargs={"token": "t", "fmt": "zip"}) == "/emargement/download/t/zip"


def test_admin_protected(client):
    r = client.get("/super-portal-f0b2b3/", follow=False)
    assert r.status_code in (301, 302)


def test_methodes_refusees(client):
    assert client.get("/emargement/commande").status_code == 405
    assert client.post("/emargement/etat").status_code == 405


def test_cli_exemple(capsys):
    from emargement.__main__ import main

    assert main(["exemple"]) == 0
    out = capsys.readouterr().out
    assert "=== plan de salle ===" in out
    assert "=== livret : 1 page(s), viande 5, végétarien 1 ===" in out
