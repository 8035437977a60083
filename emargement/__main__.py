# emargement/__main__.py
from __future__ import annotations

import argparse
import sys


def _run_exemple(sortie: str | None) -> int:
    # importe tardivement pour éviter d'imposer des dépendances quand on affiche juste l'aide
    try:
        from .exemples import run_exemple
    except ImportError as e:
        print("Impossible d'importer emargement.exemples.run_exemple :", e, file=sys.stderr)
        return 1
    run_exemple(sortie)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="emargement",
        description="Outils et exemples pour listes d'émargement et plans de salle."
    )
    sub = parser.add_subparsers(dest="cmd")

    p_ex = sub.add_parser("exemple", help="Exécute le scénario d'exemple.")
    p_ex.add_argument("--sortie", default=None, help="Dossier où écrire les artefacts rendus.")
    p_ex.set_defaults(func=lambda a: _run_exemple(a.sortie))

    # défaut: si aucune sous-commande n'est fournie, on lance l'exemple
    args = parser.parse_args(argv)
    if not args.cmd:
        return _run_exemple(None)

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
