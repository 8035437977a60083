from __future__ import annotations

from pathlib import Path
from typing import Optional

from .commandes import appliquer_commande
from .etat import EtatReunion
from .modele.reunion import InfosReunion
from .moteurs.affectation import participants_non_places
from .moteurs.pagination import LIGNES_PAR_PAGE, MARGE_FINALE
from .rendu.document import rendre_document
from .rendu.modele_rendu import construire_modele_livret
from .sauvegarde import exporter_sauvegarde, vers_json

_GROUPE = """\
Direction\tDirecteur\tMARTIN Claire
Direction\tAdjoint\tBERNARD Paul\tarrivée 10h
Informatique\tIngénieur\tPETIT Luc
Informatique\tTechnicienne\tDURAND Emma
Logistique, Responsable, ROUX Hugo
Logistique, Agent, MOREAU Léa, départ 12h
Communication\tChargée\tFOURNIER Inès
"""


def construire_exemple() -> EtatReunion:
    """
    Construit une réunion complète en rejouant des commandes UI :
    saisie groupée, gabarit en U, régie, placements et filtre par unité.
    """
    etat = EtatReunion(infos=InfosReunion(
        organisateur="Secrétariat général",
        titre_principal="Comité de pilotage",
        sous_titre="Point d'étape",
        horaire="2024-03-14T09:30",
        lieu="Salle du conseil",
        president="MARTIN Claire",
        secretaire="PETIT Luc",
    ))

    commandes = [
        {"type": "bulk_import", "text": _GROUPE},
        {"type": "resize", "rows": 5, "cols": 7},
        {"type": "template", "template": "u_single"},
        {"type": "toggle_console", "seat": "seat-4-3"},
    ]
    for cmd in commandes:
        etat, _ = appliquer_commande(etat, cmd)

    # régime et placements
    veg = etat.participants[3].id
    etat, _ = appliquer_commande(etat, {"type": "update_participant", "id": veg, "field": "dietary",
                                        "value": "vegetarian"})
    for seat, p in zip(["seat-4-0", "seat-4-1", "seat-4-2", "seat-4-4"], etat.participants):
        etat, attente = appliquer_commande(etat, {"type": "select", "participant": p.id})
        etat, attente = appliquer_commande(etat, {"type": "click", "seat": seat}, en_attente=attente)

    etat, _ = appliquer_commande(etat, {"type": "toggle_unit", "unit": "Communication"})
    return etat


def run_exemple(sortie: Optional[str] = None) -> None:
    etat = construire_exemple()

    print("=== plan de salle ===")
    print(etat.grille)

    print("\n=== non placés ===")
    for p in participants_non_places(etat.participants, etat.grille):
        print(f" - {p.nom:20s} {p.unite}")

    livret = construire_modele_livret(etat, LIGNES_PAR_PAGE, MARGE_FINALE)
    print(f"\n=== livret : {livret.nb_pages} page(s), "
          f"viande {livret.nb_viande}, végétarien {livret.nb_vegetarien} ===")
    for page in livret.pages:
        print(f"page {page.index + 1}: {page.remplies()} ligne(s) remplie(s), {page.vides()} vierge(s)")

    print("\n=== sauvegarde (extrait) ===")
    print(vers_json(exporter_sauvegarde(etat)).decode("utf-8")[:400], "...")

    if sortie:
        dossier = Path(sortie)
        dossier.mkdir(parents=True, exist_ok=True)
        for nom, blob in rendre_document(etat, taille_page=LIGNES_PAR_PAGE,
                                         marge_finale=MARGE_FINALE).values():
            (dossier / nom).write_bytes(blob)
        print(f"\nartefacts écrits dans {dossier}")


if __name__ == "__main__":
    run_exemple()
