"""
Module d'orchestration d'une exécution

Ce module enchaîne les étapes d'un instantané :
- Préparation du dossier du journal
- Énumération des services et filtrage des services arrêtés
- Écriture du séparateur et des entrées
- Résumé et code de sortie
"""

import sys
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from .errors import InventoryError, QueryError
from .formatter import InventoryFormatter
from .models import RunSeparator
from .sink import LineBuffer, LogSink


class RunState(Enum):
    """États de la machine d'exécution"""
    INIT = "init"
    DIRECTORY_READY = "directory_ready"
    INVENTORY_FETCHED = "inventory_fetched"
    LOGGED = "logged"
    SUMMARIZED = "summarized"
    SUCCESS = "success"
    FAILED = "failed"


class RunSummary:
    """Bilan d'une exécution"""

    def __init__(self, status: RunState, stopped_count: int, log_path: str,
                 error: Optional[InventoryError] = None):
        self.status = status
        self.stopped_count = stopped_count
        self.log_path = log_path
        self.error = error

    @property
    def succeeded(self) -> bool:
        return self.status is RunState.SUCCESS

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    def render(self) -> str:
        """
        Rend le résumé lisible affiché en fin d'exécution

        Returns:
            str: Résumé sur une ou deux lignes
        """
        if self.succeeded:
            return (f"✅ {self.stopped_count} service(s) arrêté(s) "
                    f"consigné(s) dans: {self.log_path}")
        return (f"❌ Échec de l'instantané: {self.error}\n"
                f"   Services consignés: {self.stopped_count}")


class RunController:
    """
    Orchestrateur d'une exécution unique

    Init -> DirectoryReady -> InventoryFetched -> Logged -> Summarized -> Success,
    toute erreur menant à Failed. Aucune reprise ni annulation.
    """

    def __init__(self, config, logger, provider=None, sink: Optional[LogSink] = None,
                 formatter: Optional[InventoryFormatter] = None,
                 clock: Callable[[], datetime] = datetime.now, output=None,
                 provider_factory: Optional[Callable] = None):
        """
        Initialise l'orchestrateur

        Args:
            config: Instance de SnapshotConfig
            logger: Instance de SnapshotLogger
            provider: Fournisseur d'inventaire des services (optionnel)
            sink: Écrivain du journal (optionnel)
            formatter: Formateur des lignes (optionnel)
            clock: Source de l'horodatage de l'exécution
            output: Flux du résumé (stdout par défaut)
            provider_factory: Fabrique appelée avec le logger si aucun fournisseur
                n'est donné, résolue à l'étape d'inventaire
        """
        self.config = config
        self.logger = logger.get_logger()
        self.snapshot_logger = logger
        self.provider = provider
        self.provider_factory = provider_factory
        self.formatter = formatter or InventoryFormatter()
        self.sink = sink or LogSink(logger, self.formatter)
        self.clock = clock
        self.output = output

        self.state = RunState.INIT
        self.history: List[RunState] = [RunState.INIT]

    def _transition(self, state: RunState):
        self.logger.debug(f"Transition {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _resolve_provider(self):
        if self.provider is None:
            if self.provider_factory is None:
                raise QueryError("Aucun fournisseur d'inventaire configuré")
            self.provider = self.provider_factory(self.snapshot_logger)
        return self.provider

    def _fail(self, log_path: str, error: InventoryError) -> RunSummary:
        self._transition(RunState.FAILED)
        self.logger.error(f"Exécution en échec: {error}")
        summary = RunSummary(RunState.FAILED, 0, log_path, error)
        self._report(summary)
        return summary

    def run(self) -> RunSummary:
        """
        Exécute le pipeline complet

        Returns:
            RunSummary: Bilan de l'exécution
        """
        log_path = self.config.log_path
        timestamp = self.clock().replace(microsecond=0)
        buffer = LineBuffer(self.config.buffer_size)

        self.logger.info(f"=== Instantané des services arrêtés ({self.formatter.format_timestamp(timestamp)}) ===")

        # Étape 1: dossier du journal
        ok, error = self.sink.ensure_directory(log_path)
        if not ok:
            return self._fail(log_path, error)
        self._transition(RunState.DIRECTORY_READY)

        # Étape 2: inventaire
        try:
            records = self._resolve_provider().list_services()
        except QueryError as e:
            return self._fail(log_path, e)
        entries = self.formatter.build_entries(records, timestamp)
        self.logger.info(f"{len(records)} service(s) énuméré(s), {len(entries)} arrêté(s)")
        self._transition(RunState.INVENTORY_FETCHED)

        # Étape 3: écriture
        ok, error = self.sink.append_separator(log_path, RunSeparator(timestamp))
        if not ok:
            return self._fail(log_path, error)

        written, error = self.sink.append_entries(log_path, entries, buffer)
        if error:
            self.logger.warning(f"{written} entrée(s) écrite(s) avant l'échec")
            return self._fail(log_path, error)
        self._transition(RunState.LOGGED)

        # Étape 4: résumé
        summary = RunSummary(RunState.SUCCESS, written, log_path)
        self._report(summary)
        self._transition(RunState.SUMMARIZED)
        self._transition(RunState.SUCCESS)
        return summary

    def _report(self, summary: RunSummary):
        print(summary.render(), file=self.output or sys.stdout)
