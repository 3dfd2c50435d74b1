"""
Module de formatage du journal des services arrêtés

Ce module convertit les services en lignes de texte à format fixe :
- Tri ordinal des services par nom
- Lignes d'entrée et ligne de séparation d'exécution
- Relecture d'une ligne d'entrée
"""

import re
from datetime import datetime
from typing import Iterable, List

from .models import LogEntry, RunSeparator, ServiceRecord, ServiceStatus

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
SEPARATOR_BAR = '=' * 23
FIELD_DELIMITER = ' - '
NO_RESULTS_LINE = 'No stopped services found at this time.'

_ENTRY_PATTERN = re.compile(r'^\[(?P<timestamp>[^\]]+)\] (?P<body>.*)$')


class InventoryFormatter:
    """
    Formateur des lignes du journal

    Toutes les méthodes sont pures : la même entrée donne toujours
    la même sortie, sans dépendance à la locale.
    """

    def format_timestamp(self, timestamp: datetime) -> str:
        """
        Formate un instant à la seconde près

        Args:
            timestamp: Instant de capture

        Returns:
            str: Horodatage au format YYYY-MM-DD HH:MM:SS
        """
        return timestamp.strftime(TIMESTAMP_FORMAT)

    def format_entry(self, entry: LogEntry) -> str:
        """
        Formate une entrée selon le gabarit
        "[{timestamp}] {name} - {displayName} - {status}"

        Args:
            entry: Entrée à formater

        Returns:
            str: Ligne sans retour à la ligne final
        """
        return (
            f"[{self.format_timestamp(entry.timestamp)}] "
            f"{entry.service_name}{FIELD_DELIMITER}"
            f"{entry.display_name}{FIELD_DELIMITER}"
            f"{entry.status.value}"
        )

    def format_separator(self, separator: RunSeparator) -> str:
        """Formate la ligne de séparation d'une exécution"""
        return f"{SEPARATOR_BAR} {self.format_timestamp(separator.timestamp)} {SEPARATOR_BAR}"

    def sort_records(self, records: Iterable[ServiceRecord]) -> List[ServiceRecord]:
        """
        Trie les services par nom, ordre ordinal croissant

        Le tri compare les points de code, indépendamment de l'ordre
        d'énumération natif du système.
        """
        return sorted(records, key=lambda record: record.name)

    def build_entries(self, records: Iterable[ServiceRecord], timestamp: datetime) -> List[LogEntry]:
        """
        Construit les entrées de journal des services arrêtés

        Args:
            records: Inventaire complet des services
            timestamp: Horodatage unique de l'exécution

        Returns:
            list: Entrées triées par nom de service
        """
        stopped = [record for record in records if record.is_stopped]
        return [
            LogEntry(
                timestamp=timestamp,
                service_name=record.name,
                display_name=record.display_name,
                status=record.status
            )
            for record in self.sort_records(stopped)
        ]

    def parse_entry_line(self, line: str) -> LogEntry:
        """
        Relit une ligne produite par format_entry

        Le nom et le libellé ne doivent pas contenir la chaîne " - ".

        Args:
            line: Ligne du journal

        Returns:
            LogEntry: Entrée reconstituée

        Raises:
            ValueError: Si la ligne n'est pas une ligne d'entrée
        """
        match = _ENTRY_PATTERN.match(line.rstrip('\r\n'))
        if not match:
            raise ValueError(f"Ligne d'entrée invalide: {line!r}")

        timestamp = datetime.strptime(match.group('timestamp'), TIMESTAMP_FORMAT)

        parts = match.group('body').split(FIELD_DELIMITER)
        if len(parts) != 3:
            raise ValueError(f"Ligne d'entrée invalide: {line!r}")

        name, display_name, status = parts
        return LogEntry(
            timestamp=timestamp,
            service_name=name,
            display_name=display_name,
            status=ServiceStatus(status)
        )
