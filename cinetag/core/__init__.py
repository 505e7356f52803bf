"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur
et la taxonomie d'erreurs. Cette couche n'a AUCUNE dépendance vers
l'infrastructure (adapters, frameworks, BDD).

Sous-packages et modules :
- entities/ : Entités métier (Category, Subcategory, Tag, ContentAssociation)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (EpisodeScope, ContentKey, ...)
- categories.py : Registre des 9 catégories fixes
- errors.py : Erreurs typées du domaine
- result.py : Contrat Result unique pour les appelants
"""
