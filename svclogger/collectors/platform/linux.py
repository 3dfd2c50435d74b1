"""
Fournisseur d'inventaire des services Linux

Ce module lit les unités de service systemd via systemctl.
"""

from typing import List

from ..base import BaseServiceProvider
from ...core.models import ServiceRecord, ServiceStatus


class LinuxServiceProvider(BaseServiceProvider):
    """
    Fournisseur pour Linux (systemd)

    La colonne ACTIVE de systemctl donne l'état, la colonne
    DESCRIPTION sert de libellé.
    """

    STATUS_MAP = {
        'active': ServiceStatus.RUNNING,
        'reloading': ServiceStatus.RUNNING,
        'refreshing': ServiceStatus.RUNNING,
        'inactive': ServiceStatus.STOPPED,
        'failed': ServiceStatus.STOPPED,
        'activating': ServiceStatus.START_PENDING,
        'deactivating': ServiceStatus.STOP_PENDING,
        'maintenance': ServiceStatus.UNKNOWN,
    }

    LIST_UNITS_COMMAND = [
        'systemctl', 'list-units',
        '--type=service', '--all',
        '--no-pager', '--no-legend', '--plain'
    ]

    LIST_UNIT_FILES_COMMAND = [
        'systemctl', 'list-unit-files',
        '--type=service',
        '--no-pager', '--no-legend'
    ]

    def _query_services(self) -> List[ServiceRecord]:
        records = self._parse_systemctl_output(self._execute_command(self.LIST_UNITS_COMMAND))

        # Fichiers d'unité installés mais jamais chargés : services arrêtés
        loaded = {record.name for record in records}
        unit_files = self._parse_unit_files_output(self._execute_command(self.LIST_UNIT_FILES_COMMAND))
        records.extend(record for record in unit_files if record.name not in loaded)

        return records

    def _parse_systemctl_output(self, output: str) -> List[ServiceRecord]:
        """
        Parse la sortie de systemctl list-units

        Args:
            output: Sortie sans en-tête ni légende

        Returns:
            list: Services parsés
        """
        records = []

        for line in output.splitlines():
            line = line.strip().lstrip('●*').strip()
            if not line:
                continue

            parts = line.split(None, 4)
            if len(parts) < 4 or not parts[0].endswith('.service'):
                continue

            unit, load_state, active_state = parts[0], parts[1], parts[2]

            # Unités référencées mais non installées
            if load_state == 'not-found':
                continue

            name = unit[:-len('.service')]
            description = self._clean_string(parts[4]) if len(parts) > 4 else ''
            records.append(ServiceRecord(
                name=name,
                display_name=description or name,
                status=self._map_status(active_state, name)
            ))

        return records

    def _parse_unit_files_output(self, output: str) -> List[ServiceRecord]:
        """
        Parse la sortie de systemctl list-unit-files

        Les gabarits (foo@.service) et les alias ne sont pas des services
        à part entière et sont ignorés.

        Args:
            output: Sortie sans en-tête ni légende (UNIT FILE, STATE, PRESET)

        Returns:
            list: Services arrêtés, libellé égal au nom
        """
        records = []

        for line in output.splitlines():
            parts = line.split()
            if len(parts) < 2 or not parts[0].endswith('.service'):
                continue

            name = parts[0][:-len('.service')]
            if name.endswith('@') or parts[1] == 'alias':
                continue

            records.append(ServiceRecord(name=name, display_name=name, status=ServiceStatus.STOPPED))

        return records
