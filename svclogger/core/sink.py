"""
Module d'écriture du journal des services arrêtés

Ce module gère la persistance en ajout seul :
- Création du dossier du journal
- Ligne de séparation entre exécutions
- Écriture des entrées par lots bornés en mémoire
"""

import os
from typing import Iterable, List, Optional, Tuple

from .errors import DirectoryError, WriteError
from .formatter import InventoryFormatter, NO_RESULTS_LINE
from .models import LogEntry, RunSeparator

MIN_BUFFER_SIZE = 10
MAX_BUFFER_SIZE = 1000
DEFAULT_BUFFER_SIZE = 100


class LineBuffer:
    """
    Zone tampon bornée de lignes formatées

    Les lignes sont rendues dans leur ordre d'ajout.
    """

    def __init__(self, capacity: int = DEFAULT_BUFFER_SIZE):
        """
        Args:
            capacity: Nombre maximal de lignes avant écriture (10 à 1000)
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValueError(f"Taille de tampon invalide: {capacity!r}")
        if not (MIN_BUFFER_SIZE <= capacity <= MAX_BUFFER_SIZE):
            raise ValueError(
                f"Taille de tampon invalide: {capacity} "
                f"(doit être entre {MIN_BUFFER_SIZE} et {MAX_BUFFER_SIZE})"
            )
        self.capacity = capacity
        self._lines: List[str] = []

    def add(self, line: str) -> bool:
        """
        Ajoute une ligne

        Returns:
            bool: True si le tampon est plein après l'ajout
        """
        self._lines.append(line)
        return len(self._lines) >= self.capacity

    def drain(self) -> List[str]:
        """Vide le tampon et retourne son contenu"""
        lines, self._lines = self._lines, []
        return lines

    def __len__(self) -> int:
        return len(self._lines)


class LogSink:
    """
    Écrivain en ajout seul du journal texte

    Chaque opération retourne un tuple (résultat, erreur) au lieu de lever
    une exception. Les lots déjà écrits ne sont jamais annulés.
    """

    def __init__(self, logger, formatter: Optional[InventoryFormatter] = None, encoding: str = 'utf-8'):
        """
        Args:
            logger: Instance de SnapshotLogger
            formatter: Formateur des lignes (optionnel)
            encoding: Encodage du fichier journal
        """
        self.logger = logger.get_logger()
        self.formatter = formatter or InventoryFormatter()
        self.encoding = encoding

    def ensure_directory(self, path: str) -> Tuple[bool, Optional[DirectoryError]]:
        """
        Crée tous les dossiers parents manquants du journal

        Sans effet si le dossier existe déjà.

        Args:
            path: Chemin du fichier journal

        Returns:
            Tuple[bool, DirectoryError]: (Succès, Erreur éventuelle)
        """
        log_dir = os.path.dirname(os.path.abspath(path))

        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as e:
            error = DirectoryError(f"Impossible de créer le dossier du journal: {e}", log_dir)
            error.__cause__ = e
            self.logger.error(str(error))
            return False, error

        self.logger.debug(f"Dossier du journal prêt: {log_dir}")
        return True, None

    def append_separator(self, path: str, separator: RunSeparator) -> Tuple[bool, Optional[WriteError]]:
        """
        Ajoute la ligne de séparation de l'exécution

        Une ligne vide la précède si le fichier existe et n'est pas vide.

        Args:
            path: Chemin du fichier journal
            separator: Séparateur portant l'horodatage de l'exécution

        Returns:
            Tuple[bool, WriteError]: (Succès, Erreur éventuelle)
        """
        lines = []
        if self._has_content(path):
            lines.append('')
        lines.append(self.formatter.format_separator(separator))

        error = self._append(path, lines)
        return error is None, error

    def append_entries(self, path: str, entries: Iterable[LogEntry],
                       buffer: LineBuffer) -> Tuple[int, Optional[WriteError]]:
        """
        Ajoute les entrées par lots de la taille du tampon

        Une écriture physique a lieu à chaque tampon plein, puis une dernière
        pour le reste. Sans entrée, une unique ligne "aucun résultat" est écrite.

        Args:
            path: Chemin du fichier journal
            entries: Entrées déjà triées
            buffer: Tampon de l'exécution

        Returns:
            Tuple[int, WriteError]: (Nombre d'entrées écrites, Erreur éventuelle)
        """
        written = 0
        seen = 0

        for entry in entries:
            seen += 1
            if buffer.add(self.formatter.format_entry(entry)):
                error, written = self._flush(path, buffer, written)
                if error:
                    return written, error

        if seen == 0:
            self.logger.info("Aucun service arrêté, écriture de la ligne dédiée")
            return 0, self._append(path, [NO_RESULTS_LINE])

        error, written = self._flush(path, buffer, written)
        return written, error

    def _flush(self, path: str, buffer: LineBuffer, written: int) -> Tuple[Optional[WriteError], int]:
        lines = buffer.drain()
        if not lines:
            return None, written

        error = self._append(path, lines)
        if error:
            return error, written

        self.logger.debug(f"Lot de {len(lines)} ligne(s) écrit")
        return None, written + len(lines)

    def _append(self, path: str, lines: List[str]) -> Optional[WriteError]:
        """
        Effectue une écriture physique en mode ajout

        Returns:
            WriteError: Erreur éventuelle, None en cas de succès
        """
        try:
            self._write_lines(path, lines)
        except OSError as e:
            error = WriteError(f"Impossible d'écrire dans le journal: {e}", path)
            error.__cause__ = e
            self.logger.error(str(error))
            return error
        return None

    def _write_lines(self, path: str, lines: List[str]):
        with open(path, 'a', encoding=self.encoding) as f:
            f.write(''.join(f"{line}\n" for line in lines))

    def _has_content(self, path: str) -> bool:
        try:
            return os.path.getsize(path) > 0
        except OSError:
            return False
