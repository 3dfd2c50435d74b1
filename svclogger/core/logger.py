"""
Module de logging de diagnostic

Ce module fournit un logging centralisé avec :
- Sortie console pour l'utilisateur
- Fichier de diagnostic optionnel avec rotation
- Formatage cohérent

Le journal d'inventaire lui-même n'est jamais écrit par ce module.
"""

import os
import sys
import logging
import logging.handlers


class SnapshotLogger:
    """
    Gestionnaire de logging de l'outil

    Cette classe configure le logger nommé de l'application à partir
    de la section [logging] de la configuration.
    """

    def __init__(self, config=None, name: str = 'StoppedServicesLogger'):
        """
        Initialise le système de logging

        Args:
            config: Instance de SnapshotConfig pour récupérer les paramètres de log
            name: Nom du logger
        """
        self.config = config
        self.logger = logging.getLogger(name)

        # Remplacer les handlers d'une configuration précédente
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        self._setup_logging()

    def _setup_logging(self):
        """
        Configure le niveau, la console et le fichier de diagnostic éventuel
        """
        if self.config:
            logging_config = self.config.get_logging_config()
        else:
            logging_config = {
                'log_level': 'INFO',
                'diagnostic_file': '',
                'max_log_size': 10485760,  # 10MB
                'backup_count': 5
            }

        log_level = getattr(logging, logging_config['log_level'], logging.INFO)
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        diagnostic_file = logging_config['diagnostic_file']
        if diagnostic_file:
            self._add_file_handler(
                diagnostic_file,
                log_level,
                logging_config['max_log_size'],
                logging_config['backup_count']
            )

        # Handler console, sur stderr pour laisser stdout au résumé
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(fmt='%(levelname)s - %(message)s'))
        self.logger.addHandler(console_handler)

        self.logger.debug("Système de logging initialisé")

    def _add_file_handler(self, log_file: str, log_level: int, max_size: int, backup_count: int):
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
        except OSError as e:
            print(f"Erreur lors de la configuration du logging fichier: {e}", file=sys.stderr)
            return

        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """
        Retourne l'instance du logger

        Returns:
            logging.Logger: Instance du logger configuré
        """
        return self.logger

    def debug(self, message: str):
        """Log un message de niveau DEBUG"""
        self.logger.debug(message)

    def error(self, message: str):
        """Log un message de niveau ERROR"""
        self.logger.error(message)

    def exception(self, message: str):
        """
        Log une exception avec sa stack trace

        Args:
            message: Message descriptif de l'erreur
        """
        self.logger.exception(message)

    def log_config_info(self, config):
        """
        Log les informations de configuration au niveau DEBUG

        Args:
            config: Instance de SnapshotConfig
        """
        self.debug("=== Configuration ===")
        self.debug(f"Fichier: {config.config_file} ({'chargé' if config.loaded else 'défauts'})")
        for key, value in config.get_inventory_config().items():
            self.debug(f"Inventory.{key}: {value}")
        for key, value in config.get_logging_config().items():
            self.debug(f"Logging.{key}: {value}")
        self.debug("=== Fin configuration ===")

