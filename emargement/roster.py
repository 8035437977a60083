from __future__ import annotations

import re
import uuid
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .modele.participant import Participant, Regime

# Champs modifiables depuis le formulaire : clé UI -> attribut de `Participant`
CHAMPS_MODIFIABLES = {
    "unit": "unite",
    "title": "fonction",
    "name": "nom",
    "note": "remarque",
    "dietary": "regime",
}

_SEPARATEURS = re.compile(r"[\t,]+")


def nouvel_id() -> str:
    return str(uuid.uuid4())


def ajouter_participant(
        participants: Sequence[Participant],
        participant: Participant,
) -> Tuple[Participant, ...]:
    """Ajoute `participant` en fin de liste ; un nom vide est refusé (sans effet)."""
    if not participant.nom.strip():
        return tuple(participants)
    return (*participants, participant)


def modifier_participant(
        participants: Sequence[Participant],
        participant_id: str,
        champ: str,
        valeur: str,
) -> Tuple[Participant, ...]:
    """
    Remplace un champ du participant `participant_id`.

    `champ` est une clé UI (« unit », « title », « name », « note »,
    « dietary ») ; lève `ValueError` pour une clé ou un régime inconnus.
    """
    attribut: Optional[str] = CHAMPS_MODIFIABLES.get(champ)
    if attribut is None:
        raise ValueError(f"Champ de participant inconnu: {champ!r}")
    nouvelle_valeur = Regime(valeur) if attribut == "regime" else str(valeur)
    return tuple(
        replace(p, **{attribut: nouvelle_valeur}) if p.id == participant_id else p
        for p in participants
    )


def retirer_participant(participants: Sequence[Participant], participant_id: str) -> Tuple[Participant, ...]:
    """
    Retire le participant de la liste.

    Les sièges qui le référencent ne sont pas modifiés : la référence
    pendante est rendue comme un siège libre.
    """
    return tuple(p for p in participants if p.id != participant_id)


def analyser_texte_groupe(texte: str) -> List[Participant]:
    """
    Analyse un collage multi-lignes (tableur, CSV) en participants.

    Chaque ligne est découpée sur les tabulations / virgules :
      - 2 champs : unité, nom
      - 3 champs : unité, fonction, nom
      - 4 et plus : unité, fonction, nom, remarque (le reste est ignoré)
    Les lignes de moins de 2 champs sont ignorées.
    """
    out: List[Participant] = []
    for ligne in (texte or "").splitlines():
        parts = [t.strip() for t in _SEPARATEURS.split(ligne)]
        parts = [t for t in parts if t]
        if len(parts) < 2:
            continue

        fonction, remarque = "", ""
        if len(parts) == 2:
            unite, nom = parts
        elif len(parts) == 3:
            unite, fonction, nom = parts
        else:
            unite, fonction, nom, remarque = parts[:4]

        out.append(Participant(
            id=nouvel_id(),
            unite=unite,
            fonction=fonction,
            nom=nom,
            remarque=remarque,
        ))
    return out
