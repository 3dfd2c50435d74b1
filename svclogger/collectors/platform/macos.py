"""
Fournisseur d'inventaire des services macOS

Ce module lit les jobs launchd via launchctl.
"""

from typing import List

from ..base import BaseServiceProvider
from ...core.models import ServiceRecord, ServiceStatus


class MacOSServiceProvider(BaseServiceProvider):
    """
    Fournisseur pour macOS (launchd)

    launchctl ne donne qu'un PID : un job sans PID est arrêté.
    """

    def _query_services(self) -> List[ServiceRecord]:
        output = self._execute_command(['launchctl', 'list'])
        return self._parse_launchctl_output(output)

    def _parse_launchctl_output(self, output: str) -> List[ServiceRecord]:
        """
        Parse la sortie de launchctl list

        Args:
            output: Sortie de launchctl (PID, Status, Label)

        Returns:
            list: Services parsés
        """
        records = []

        for line in output.splitlines()[1:]:  # Ignorer l'en-tête
            parts = line.split('\t')
            if len(parts) < 3:
                continue

            pid, label = parts[0].strip(), self._clean_string(parts[2])
            if not label:
                continue

            status = ServiceStatus.STOPPED if pid == '-' else ServiceStatus.RUNNING
            records.append(ServiceRecord(name=label, display_name=label, status=status))

        return records
