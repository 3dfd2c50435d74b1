"""
Fournisseur d'inventaire des services Windows

Ce module énumère les services du Service Control Manager via psutil.
"""

import sys
from typing import List

import psutil

from ..base import BaseServiceProvider
from ...core.errors import QueryError
from ...core.models import ServiceRecord, ServiceStatus


class WindowsServiceProvider(BaseServiceProvider):
    """
    Fournisseur pour Windows

    Utilise psutil.win_service_iter() pour lire le nom, le libellé
    et l'état de chaque service enregistré.
    """

    STATUS_MAP = {
        'running': ServiceStatus.RUNNING,
        'stopped': ServiceStatus.STOPPED,
        'paused': ServiceStatus.PAUSED,
        'start_pending': ServiceStatus.START_PENDING,
        'stop_pending': ServiceStatus.STOP_PENDING,
        'pause_pending': ServiceStatus.UNKNOWN,
        'continue_pending': ServiceStatus.UNKNOWN,
    }

    def _query_services(self) -> List[ServiceRecord]:
        if not hasattr(psutil, 'win_service_iter'):
            raise QueryError(f"Énumération des services Windows indisponible sur {sys.platform}")

        records = []

        try:
            for service in psutil.win_service_iter():
                name = self._clean_string(service.name())
                records.append(ServiceRecord(
                    name=name,
                    display_name=self._clean_string(service.display_name()),
                    status=self._map_status(service.status(), name)
                ))
        except psutil.AccessDenied as e:
            raise QueryError(f"Accès refusé au gestionnaire de services: {e}") from e
        except (psutil.Error, OSError) as e:
            raise QueryError(f"Erreur énumération services Windows: {e}") from e

        return records
