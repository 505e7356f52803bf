"""
CineTag - Taxonomie personnelle de tags pour une vidéothèque.

Ce package permet d'attacher une hiérarchie de tags (catégories fixes,
sous-catégories, tags utilisateur) aux films, séries et épisodes d'une
collection, et de maintenir cette taxonomie cohérente.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (stores, fusion, comptage d'usage)
- infrastructure/ : Persistance SQLite via SQLModel
- adapters/ : Interfaces externes (CLI, identité)
"""

__version__ = "0.1.0"
