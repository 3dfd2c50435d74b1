"""
Package des fournisseurs d'inventaire des services

Ce package contient :
- Le fournisseur de base (classe abstraite)
- Les fournisseurs spécifiques par plateforme
"""
