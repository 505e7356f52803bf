"""
Adaptateurs vers le monde exterieur.

- identity.py : Fournisseurs d'identite (utilisateur courant)
- cli/ : Interface en ligne de commande (Typer + Rich)
"""
