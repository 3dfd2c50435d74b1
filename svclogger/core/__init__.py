"""
Module Core - Composants principaux de l'outil d'instantané

Ce module contient les fonctionnalités de base :
- Configuration
- Logging de diagnostic
- Modèles de données et erreurs
- Formatage et écriture du journal
- Orchestration d'une exécution
"""
