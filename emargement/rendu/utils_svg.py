from __future__ import annotations

import html
from datetime import datetime
from typing import List

from ..modele.page import Page
from .modele_rendu import ModeleLivret, ModeleSieges

# A4 portrait à 96 dpi
PAGE_W, PAGE_H = 794, 1123


def formater_horaire(horaire: str) -> str:
    """« 2022-09-05T09:30 » -> « 05/09/2022 09:30 » ; texte brut sinon."""
    if not horaire:
        return ""
    try:
        dt = datetime.fromisoformat(horaire)
    except ValueError:
        return horaire
    return dt.strftime("%d/%m/%Y %H:%M")


def _t(x: float, y: float, texte: str, size: int = 14, anchor: str = "middle", bold: bool = False,
       fill: str = "#111827") -> str:
    weight = ' font-weight="700"' if bold else ""
    return (
        f'<text x="{x:.0f}" y="{y:.0f}" text-anchor="{anchor}" font-size="{size}"{weight} '
        f'fill="{fill}">{html.escape(texte)}</text>'
    )


def _rect(x: float, y: float, w: float, h: float, fill: str = "none", stroke: str = "#111827",
          sw: float = 1) -> str:
    return (
        f'<rect x="{x:.0f}" y="{y:.0f}" width="{w:.0f}" height="{h:.0f}" fill="{fill}" '
        f'stroke="{stroke}" stroke-width="{sw}"/>'
    )


def svg_page_livret(modele: ModeleLivret, page: Page) -> str:
    """
    Génère le SVG autonome d'une page du livret d'émargement.

    Ne recalcule aucun découpage : la page vient de `modele.pages`.
    """
    infos = modele.infos
    padX = 40
    largeur = PAGE_W - 2 * padX
    gris = "#f3f4f6"

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {PAGE_W} {PAGE_H}" '
        f'width="{PAGE_W}" height="{PAGE_H}" font-family="sans-serif">',
        f'<rect x="0" y="0" width="{PAGE_W}" height="{PAGE_H}" fill="#ffffff"/>',
        _t(PAGE_W / 2, 70, infos.titre_principal, size=22, bold=True),
        _t(PAGE_W / 2, 102, infos.sous_titre, size=18, bold=True),
        _t(PAGE_W / 2, 132, infos.nom_document, size=18, bold=True),
        _t(PAGE_W - padX, 160, f"Organisateur : {infos.organisateur}", size=14, anchor="end"),
    ]

    # --- tableau d'informations (2 lignes x 4 cellules)
    y0, h_info = 172, 40
    cellules = [
        [("Date", True), (formater_horaire(infos.horaire), False), ("Lieu", True), (infos.lieu, False)],
        [("Président", True), (infos.president, False), ("Secrétaire", True), (infos.secretaire, False)],
    ]
    proportions = [0.15, 0.35, 0.15, 0.35]
    for i, ligne in enumerate(cellules):
        x = padX
        y = y0 + i * h_info
        for (texte, est_libelle), prop in zip(ligne, proportions):
            w = largeur * prop
            parts.append(_rect(x, y, w, h_info, fill=gris if est_libelle else "none"))
            if est_libelle:
                parts.append(_t(x + w / 2, y + 26, texte, bold=True))
            else:
                parts.append(_t(x + 8, y + 26, texte, anchor="start"))
            x += w

    # --- tableau des participants
    colonnes = [
        (0.05, ""),
        (0.20, modele.libelle_unite),
        (0.15, "Fonction"),
        (0.40, "Signature"),
        (0.20, "Remarque"),
    ]
    y_entete, h_entete = y0 + 2 * h_info + 12, 50
    x = padX
    for prop, libelle in colonnes:
        w = largeur * prop
        parts.append(_rect(x, y_entete, w, h_entete, fill=gris))
        if libelle:
            parts.append(_t(x + w / 2, y_entete + 30, libelle, bold=True))
        x += w

    y_lignes = y_entete + h_entete
    h_ligne = 700 / max(1, len(page.lignes))
    # colonne latérale fusionnée sur toutes les lignes
    parts.append(_rect(padX, y_lignes, largeur * 0.05, h_ligne * len(page.lignes), fill=gris))
    parts.append(
        f'<text x="{padX + largeur * 0.025:.0f}" y="{y_lignes + h_ligne * len(page.lignes) / 2:.0f}" '
        f'text-anchor="middle" font-size="16" font-weight="700" writing-mode="tb">Présents</text>'
    )

    for i, ligne in enumerate(page.lignes):
        y = y_lignes + i * h_ligne
        x = padX + largeur * 0.05
        valeurs = ["", "", "", ""]
        if ligne is not None:
            valeurs = [ligne.unite, ligne.fonction, ligne.nom, ligne.remarque_affichee(infos.afficher_regime)]
        for (prop, _), valeur, idx in zip(colonnes[1:], valeurs, range(4)):
            w = largeur * prop
            parts.append(_rect(x, y, w, h_ligne))
            if valeur:
                if idx == 2:
                    parts.append(_t(x + 12, y + h_ligne / 2 + 6, valeur, size=16, anchor="start"))
                else:
                    parts.append(_t(x + w / 2, y + h_ligne / 2 + 5, valeur, size=13))
            x += w

    y_fin = y_lignes + h_ligne * len(page.lignes)
    if page.index == modele.nb_pages - 1 and infos.afficher_regime:
        parts.append(_t(
            PAGE_W - padX, y_fin + 28,
            f"Total : viande {modele.nb_viande}, végétarien {modele.nb_vegetarien}",
            anchor="end",
        ))

    parts.append(_t(PAGE_W / 2, PAGE_H - 30, f"Page {page.index + 1} / {modele.nb_pages}",
                    size=12, fill="#666666"))
    parts.append("</svg>")
    return "".join(parts)


def svg_plan_sieges(modele: ModeleSieges, titre: str = "Plan de salle", width_min: int = 600) -> str:
    """
    Génère le SVG autonome du plan de salle.

    - siège inactif : rien n'est dessiné ;
    - siège de régie : fond violet pâle, « Régie » s'il est libre ;
    - siège occupé : fond bleu pâle, nom puis fonction.
    """
    padX, padY = 20, 16
    seatW, seatH, gap = 90, 60, 8
    titreH, stageH = 40, 32

    gridW = modele.colonnes * seatW + max(0, modele.colonnes - 1) * gap
    totalW = max(gridW, width_min) + 2 * padX
    origineX = (totalW - gridW) / 2
    origineY = padY + titreH + stageH + 30
    totalH = origineY + modele.rangees * (seatH + gap) + padY

    stageW = totalW * 0.6
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {totalW:.0f} {totalH:.0f}" font-family="sans-serif">',
        f'<rect x="0" y="0" width="100%" height="100%" fill="#ffffff"/>',
        _t(totalW / 2, padY + 24, titre, size=22, bold=True),
        _rect((totalW - stageW) / 2, padY + titreH, stageW, stageH, fill="#d9d9d9", stroke="#111827", sw=2),
        _t(totalW / 2, padY + titreH + 21, "Écran / Pupitre", bold=True),
    ]

    for r, ligne in enumerate(modele.cellules):
        for c, cel in enumerate(ligne):
            s = cel.siege
            if not s.actif:
                continue
            x = origineX + c * (seatW + gap)
            y = origineY + r * (seatH + gap)
            if s.est_console():
                fill = "#f3e5f5"
            elif cel.occupant is not None:
                fill = "#e3f2fd"
            else:
                fill = "#ffffff"
            parts.append(
                f'<rect x="{x:.0f}" y="{y:.0f}" width="{seatW}" height="{seatH}" rx="6" '
                f'fill="{fill}" stroke="#9aa4b2"/>'
            )
            if cel.occupant is not None:
                parts.append(_t(x + seatW / 2, y + 26, cel.occupant.nom, size=13, bold=True))
                parts.append(_t(x + seatW / 2, y + 44, cel.occupant.fonction, size=10, fill="#4b5563"))
            elif s.est_console():
                parts.append(_t(x + seatW / 2, y + 36, "Régie", size=11, fill="#6b21a8"))

    parts.append("</svg>")
    return "".join(parts)
