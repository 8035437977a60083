from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

# (rangee, colonne, nb_rangees, nb_colonnes) -> siège actif ?
PredicatGabarit = Callable[[int, int, int, int], bool]


class TypeGabarit(str, Enum):
    """Gabarits géométriques de disposition de salle."""

    PLEIN = "full"
    U_SIMPLE = "u_single"
    U_DOUBLE = "u_double"
    CARRE_CREUX = "hollow"
    SALLE_DE_CLASSE = "classroom"


_REGISTRE: Dict[TypeGabarit, PredicatGabarit] = {}


def enregistrer(type_g: TypeGabarit):
    """Décorateur enregistrant le prédicat d'activité d'un `TypeGabarit`."""

    def deco(predicat: PredicatGabarit) -> PredicatGabarit:
        _REGISTRE[type_g] = predicat
        return predicat

    return deco


def predicat_de(nom: str) -> Optional[PredicatGabarit]:
    """Retourne le prédicat du gabarit `nom`, ou `None` s'il est inconnu."""
    try:
        type_g = TypeGabarit(str(nom))
    except ValueError:
        return None
    return _REGISTRE.get(type_g)


def gabarits_disponibles() -> list[str]:
    """Noms des gabarits enregistrés, dans l'ordre de déclaration."""
    return [t.value for t in TypeGabarit if t in _REGISTRE]


# --- prédicats -----------------------------------------------------------------


@enregistrer(TypeGabarit.PLEIN)
def _plein(r: int, c: int, nb_r: int, nb_c: int) -> bool:
    return True


@enregistrer(TypeGabarit.U_SIMPLE)
def _u_simple(r: int, c: int, nb_r: int, nb_c: int) -> bool:
    # ouverture du U côté écran (rangée 0)
    return c == 0 or c == nb_c - 1 or r == nb_r - 1


@enregistrer(TypeGabarit.U_DOUBLE)
def _u_double(r: int, c: int, nb_r: int, nb_c: int) -> bool:
    return c < 2 or c >= nb_c - 2 or r >= nb_r - 2


@enregistrer(TypeGabarit.CARRE_CREUX)
def _carre_creux(r: int, c: int, nb_r: int, nb_c: int) -> bool:
    return r == 0 or r == nb_r - 1 or c == 0 or c == nb_c - 1


@enregistrer(TypeGabarit.SALLE_DE_CLASSE)
def _salle_de_classe(r: int, c: int, nb_r: int, nb_c: int) -> bool:
    milieu = nb_c // 2
    if nb_c % 2 == 0:
        allee = {milieu - 1, milieu}
    else:
        allee = {milieu}
    return c not in allee
