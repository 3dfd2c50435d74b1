"""
Classe de base pour les fournisseurs d'inventaire des services

Ce module définit l'interface commune que chaque plateforme
doit implémenter, ainsi que des utilitaires partagés.
"""

import re
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Dict, List

from ..core.errors import QueryError
from ..core.models import ServiceRecord, ServiceStatus


class BaseServiceProvider(ABC):
    """
    Classe de base abstraite pour les fournisseurs d'inventaire

    Chaque appel à list_services effectue une nouvelle requête auprès
    du système, sans cache. L'inventaire est retourné en entier ou
    l'appel échoue avec QueryError.
    """

    # Correspondance état natif -> ServiceStatus, à définir par plateforme
    STATUS_MAP: Dict[str, ServiceStatus] = {}

    command_timeout = 30

    def __init__(self, logger):
        """
        Initialise le fournisseur

        Args:
            logger: Instance de SnapshotLogger
        """
        self.logger = logger.get_logger()
        self.provider_name = self.__class__.__name__

    def list_services(self) -> List[ServiceRecord]:
        """
        Énumère tous les services enregistrés sur l'hôte

        Returns:
            list: Services avec leur état courant

        Raises:
            QueryError: Si le gestionnaire de services est inaccessible
        """
        start_time = time.time()
        self.logger.debug(f"Début énumération {self.provider_name}")

        records = self._query_services()

        duration = time.time() - start_time
        self.logger.debug(f"Énumération {self.provider_name} terminée en {duration:.2f}s: {len(records)} service(s)")
        return records

    @abstractmethod
    def _query_services(self) -> List[ServiceRecord]:
        """
        Requête spécifique à la plateforme - doit être implémentée par chaque fournisseur

        Returns:
            list: Services de l'hôte
        """

    def _map_status(self, native_status: str, service_name: str) -> ServiceStatus:
        """
        Convertit un état natif en ServiceStatus

        Raises:
            QueryError: Si l'état n'est pas reconnu
        """
        status = self.STATUS_MAP.get(native_status.strip().lower())
        if status is None:
            raise QueryError(f"État de service non reconnu '{native_status}' pour {service_name}")
        return status

    def _clean_string(self, value) -> str:
        """
        Nettoie une chaîne de caractères

        Args:
            value: Valeur à nettoyer

        Returns:
            str: Chaîne nettoyée
        """
        if not value:
            return ""

        value = str(value).strip()

        # Supprimer les caractères de contrôle
        value = ''.join(char for char in value if char.isprintable())

        # Supprimer les espaces multiples
        return re.sub(r'\s+', ' ', value)

    def _execute_command(self, command: List[str]) -> str:
        """
        Exécute une commande système et retourne sa sortie

        Args:
            command: Commande et arguments

        Returns:
            str: Sortie standard de la commande

        Raises:
            QueryError: Commande absente, en échec ou hors délai
        """
        command_line = ' '.join(command)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.command_timeout
            )
        except subprocess.TimeoutExpired as e:
            raise QueryError(f"Timeout pour la commande: {command_line}") from e
        except OSError as e:
            raise QueryError(f"Erreur lors de l'exécution de '{command_line}': {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise QueryError(f"Commande échouée: {command_line} (code: {result.returncode}) {stderr}".rstrip())

        return result.stdout
