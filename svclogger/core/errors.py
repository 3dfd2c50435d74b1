"""
Erreurs de l'outil d'instantané des services

Chaque étape du pipeline possède sa propre catégorie d'erreur :
- DirectoryError : dossier du journal impossible à créer ou à atteindre
- QueryError : gestionnaire de services du système inaccessible
- WriteError : ajout impossible dans le fichier journal
"""

from typing import Optional


class InventoryError(Exception):
    """Erreur de base de l'outil"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class DirectoryError(InventoryError):
    """Le dossier parent du journal ne peut pas être créé"""


class QueryError(InventoryError):
    """Les services du système ne peuvent pas être énumérés"""


class WriteError(InventoryError):
    """Le fichier journal ne peut pas être complété"""
