"""
Modèles de données d'une exécution

Toutes les valeurs sont immuables et ne vivent que le temps d'une exécution.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ServiceStatus(Enum):
    """États d'exécution d'un service, rendus par leur nom canonique"""
    RUNNING = "Running"
    STOPPED = "Stopped"
    PAUSED = "Paused"
    START_PENDING = "StartPending"
    STOP_PENDING = "StopPending"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ServiceRecord:
    """
    Service tel que lu auprès du système au moment de la requête

    Attributes:
        name: Identifiant stable, unique sur l'hôte
        display_name: Libellé lisible, pas forcément unique
        status: État d'exécution courant
    """
    name: str
    display_name: str
    status: ServiceStatus

    @property
    def is_stopped(self) -> bool:
        return self.status is ServiceStatus.STOPPED


@dataclass(frozen=True)
class LogEntry:
    """Ligne de journal dérivée d'un service arrêté"""
    timestamp: datetime
    service_name: str
    display_name: str
    status: ServiceStatus


@dataclass(frozen=True)
class RunSeparator:
    """Marqueur de début d'exécution dans le journal"""
    timestamp: datetime
