from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .siege import Siege, id_siege


class GrilleSieges:
    """
    Modélise la salle comme une grille rectangulaire de sièges.

    Invariant de structure :
    - exactement un `Siege` par coordonnée (rangee, colonne) avec
      0 <= rangee < rangees et 0 <= colonne < colonnes ;
    - aucun doublon, aucun trou.

    La grille est immuable : les moteurs (`emargement.moteurs`) en
    construisent une nouvelle à chaque opération.

    Exemple :
        grille = GrilleSieges.depuis_dimensions(6, 8)   # 48 sièges actifs
    """

    def __init__(self, rangees: int, colonnes: int, sieges: Iterable[Siege]) -> None:
        """
        Indexe les sièges par coordonnée.

        Args:
            rangees: nombre de rangées.
            colonnes: nombre de colonnes.
            sieges: un siège par case ; l'ordre est indifférent.

        Lève `ValueError` si une case manque, est dupliquée ou sort des bornes.
        """
        self._rangees: int = rangees
        self._colonnes: int = colonnes
        self._sieges: Dict[Tuple[int, int], Siege] = {}

        for s in sieges:
            if not (0 <= s.rangee < rangees and 0 <= s.colonne < colonnes):
                raise ValueError(f"Siège hors grille: {s.id} pour {rangees}x{colonnes}")
            if s.coord in self._sieges:
                raise ValueError(f"Siège en double: {s.id}")
            self._sieges[s.coord] = s

        if len(self._sieges) != rangees * colonnes:
            raise ValueError(
                f"Grille incomplète: {len(self._sieges)} sièges pour {rangees}x{colonnes}"
            )

    @classmethod
    def depuis_dimensions(cls, rangees: int, colonnes: int) -> "GrilleSieges":
        """Construit une grille pleine : sièges actifs, standards et libres."""
        return cls(
            rangees,
            colonnes,
            (Siege(rangee=r, colonne=c) for r in range(rangees) for c in range(colonnes)),
        )

    # --- Accès de base -----------------------------------------------------

    @property
    def rangees(self) -> int:
        return self._rangees

    @property
    def colonnes(self) -> int:
        return self._colonnes

    def siege(self, rangee: int, colonne: int) -> Optional[Siege]:
        """Retourne le siège en (rangee, colonne), ou `None` hors grille."""
        return self._sieges.get((rangee, colonne))

    def siege_par_id(self, seat_id: str) -> Optional[Siege]:
        """Retrouve un siège par son identifiant « seat-r-c »."""
        for s in self._sieges.values():
            if s.id == seat_id:
                return s
        return None

    def sieges(self) -> List[Siege]:
        """
        Énumère les sièges par rangée croissante puis par colonne croissante.
        """
        return [self._sieges[(r, c)] for r in range(self._rangees) for c in range(self._colonnes)]

    def rangee(self, r: int) -> List[Siege]:
        """Sièges d'une rangée, de gauche à droite."""
        return [self._sieges[(r, c)] for c in range(self._colonnes)]

    def remplacer(self, *nouveaux: Siege) -> "GrilleSieges":
        """Retourne une copie où les sièges donnés remplacent ceux de même coordonnée."""
        index: Dict[Tuple[int, int], Siege] = dict(self._sieges)
        for s in nouveaux:
            index[s.coord] = s
        return GrilleSieges(self._rangees, self._colonnes, index.values())

    def ids_occupants(self) -> set[str]:
        """Ensemble des `participant_id` présents sur la grille."""
        return {s.participant_id for s in self._sieges.values() if s.participant_id is not None}

    def __iter__(self) -> Iterator[Siege]:
        return iter(self.sieges())

    def __len__(self) -> int:
        return len(self._sieges)

    def __eq__(self, autre: object) -> bool:
        return (
            isinstance(autre, GrilleSieges)
            and self._rangees == autre._rangees
            and self._colonnes == autre._colonnes
            and self._sieges == autre._sieges
        )

    def __hash__(self) -> int:
        return hash((self._rangees, self._colonnes, frozenset(self._sieges.items())))

    def __str__(self) -> str:
        """
        Représentation texte simple, rangée par rangée.
        « . » inactif, « o » libre, « # » occupé, « C » régie.
        Utile pour debug.
        """
        lignes: List[str] = []
        for r in range(self._rangees):
            cases: List[str] = []
            for s in self.rangee(r):
                if not s.actif:
                    cases.append(".")
                elif s.est_console():
                    cases.append("C")
                elif s.est_occupe():
                    cases.append("#")
                else:
                    cases.append("o")
            lignes.append("".join(cases))
        return "\n".join(lignes)

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return f"GrilleSieges({self._rangees}x{self._colonnes})"


__all__ = ["GrilleSieges", "id_siege"]
