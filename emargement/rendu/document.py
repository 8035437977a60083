from __future__ import annotations

"""
Moteur de document : transforme les modèles de rendu en artefacts binaires.

- une page SVG par page du livret + le plan de salle en SVG ;
- conversion PDF via CairoSVG (si installé) ;
- la sauvegarde JSON ré-importable ;
- une archive ZIP regroupant le tout.

Les pages viennent exclusivement de `ModeleLivret.pages` : aucun second
découpage n'est calculé ici.
"""

import io
import logging
import re
import zipfile
from datetime import datetime
from types import ModuleType
from typing import Dict, Mapping, Optional, Tuple

from ..etat import EtatReunion
from ..modele.reunion import InfosReunion
from ..sauvegarde import exporter_sauvegarde, vers_json
from .modele_rendu import ModeleLivret, ModeleSieges, construire_modele_livret, construire_modele_sieges
from .utils_svg import svg_page_livret, svg_plan_sieges

logger = logging.getLogger(__name__)

_CARACTERES_INTERDITS = re.compile(r'[\\/:*?"<>|]')

# clé d'artefact -> (nom de fichier public, contenu)
Artefacts = Dict[str, Tuple[str, bytes]]


def base_nom_fichier(infos: InfosReunion) -> str:
    """
    Base de nom sûre : <AAAAMMJJ>_<titre[:15]>[_<sous-titre[:15]>]

    Un horaire illisible donne « date-inconnue » à la place de la date.
    """
    try:
        date = datetime.fromisoformat(infos.horaire).strftime("%Y%m%d")
    except ValueError:
        date = "date-inconnue"
    titre = _CARACTERES_INTERDITS.sub("", infos.titre_principal).strip()[:15]
    sous_titre = _CARACTERES_INTERDITS.sub("", infos.sous_titre).strip()[:15]
    return f"{date}_{titre}" + (f"_{sous_titre}" if sous_titre else "")


def nom_fichier(infos: InfosReunion, extension: str) -> str:
    return f"{base_nom_fichier(infos)}.{extension}"


def _charger_cairosvg() -> Optional[ModuleType]:
    """Module CairoSVG, ou `None` (avec un avertissement) s'il ne se charge pas."""
    try:
        import cairosvg  # type: ignore
    except Exception as exc:
        logger.warning("CairoSVG indisponible, export PDF ignoré: %s", exc)
        return None
    return cairosvg


def _svg_vers_pdf(cairosvg: Optional[ModuleType], svg: str) -> Optional[bytes]:
    """
    Convertit SVG -> PDF via CairoSVG (si chargé), fond blanc forcé.
    """
    if cairosvg is None:
        return None
    buf = io.BytesIO()
    cairosvg.svg2pdf(bytestring=svg.encode("utf-8"), write_to=buf, background_color="white")
    return buf.getvalue()


def _package_zip(files: Mapping[str, bytes]) -> bytes:
    """
    Construit une archive ZIP en mémoire, à partir d'un mapping nom -> contenu.
    """
    out = io.BytesIO()
    with zipfile.ZipFile(out, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for fname, blob in files.items():
            zf.writestr(fname, blob)
    return out.getvalue()


def rendre_modeles(livret: ModeleLivret, sieges: ModeleSieges, prefixe: str) -> Artefacts:
    """Rend les pages du livret et le plan de salle (SVG, puis PDF si possible)."""
    cairo = _charger_cairosvg()
    out: Artefacts = {}
    for page in livret.pages:
        cle = f"livret_p{page.index + 1:02d}"
        svg = svg_page_livret(livret, page)
        out[f"{cle}_svg"] = (f"{prefixe}_livret_p{page.index + 1:02d}.svg", svg.encode("utf-8"))
        pdf = _svg_vers_pdf(cairo, svg)
        if pdf:
            out[f"{cle}_pdf"] = (f"{prefixe}_livret_p{page.index + 1:02d}.pdf", pdf)

    svg_plan = svg_plan_sieges(sieges)
    out["plan_svg"] = (f"{prefixe}_plan.svg", svg_plan.encode("utf-8"))
    pdf_plan = _svg_vers_pdf(cairo, svg_plan)
    if pdf_plan:
        out["plan_pdf"] = (f"{prefixe}_plan.pdf", pdf_plan)
    return out


def rendre_document(
        etat: EtatReunion,
        *,
        taille_page: int,
        marge_finale: int,
        horodatage: Optional[datetime] = None,
) -> Artefacts:
    """
    Produit tous les artefacts d'export pour `etat`, archive ZIP comprise.
    """
    livret = construire_modele_livret(etat, taille_page, marge_finale)
    sieges = construire_modele_sieges(etat)
    prefixe = base_nom_fichier(etat.infos)

    artefacts = rendre_modeles(livret, sieges, prefixe)
    artefacts["json"] = (f"{prefixe}.json", vers_json(exporter_sauvegarde(etat, horodatage)))
    artefacts["zip"] = (
        nom_fichier(etat.infos, "zip"),
        _package_zip({nom: blob for nom, blob in artefacts.values()}),
    )
    logger.info("Document rendu: %d page(s) de livret, %d artefact(s)", livret.nb_pages, len(artefacts))
    return artefacts
