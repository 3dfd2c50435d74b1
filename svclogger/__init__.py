"""
Stopped Services Logger - Instantané des services système arrêtés

Ce module principal fournit un outil en ligne de commande qui interroge
le gestionnaire de services du système d'exploitation, retient les services
arrêtés et les ajoute, horodatés, à un fichier journal texte.

Author: Stopped Services Logger Team
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Stopped Services Logger Team"

# Imports principaux pour faciliter l'utilisation
from .core.config import SnapshotConfig
from .core.controller import RunController
from .core.logger import SnapshotLogger

__all__ = ['SnapshotConfig', 'RunController', 'SnapshotLogger']
