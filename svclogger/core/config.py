"""
Module de configuration de l'outil d'instantané

Ce module gère la configuration, incluant :
- Lecture du fichier de configuration INI
- Validation des paramètres
- Valeurs par défaut
- Chemins par défaut spécifiques à la plateforme
"""

import os
import sys
import configparser
from typing import Dict, Any, List, Optional

from .sink import DEFAULT_BUFFER_SIZE, MAX_BUFFER_SIZE, MIN_BUFFER_SIZE

LOG_FILE_NAME = 'StoppedServices.log'
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class SnapshotConfig:
    """
    Gestionnaire de configuration de l'outil

    Cette classe centralise les paramètres du journal d'inventaire
    et du logging de diagnostic.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialise la configuration

        Args:
            config_file: Chemin vers le fichier de configuration (optionnel)
        """
        self.config = configparser.ConfigParser(interpolation=None)
        self.config_file = config_file or self._get_default_config_path()
        self.loaded = False
        self.load_errors: List[str] = []

        # Définir les valeurs par défaut
        self._set_defaults()

        # Charger la configuration depuis le fichier
        self._load_config()

    def _get_default_config_path(self) -> str:
        """
        Détermine le chemin par défaut du fichier de configuration selon la plateforme

        Returns:
            str: Chemin vers le fichier de configuration
        """
        if sys.platform == "win32":
            return os.path.join(
                os.environ.get("PROGRAMFILES", "C:\\Program Files"),
                "Stopped Services Logger",
                "config",
                "config.ini"
            )
        return "/etc/stopped-services-logger/config.ini"

    def _get_default_logs_dir(self) -> str:
        """
        Détermine le dossier par défaut du journal selon la plateforme

        Returns:
            str: Dossier du journal
        """
        if sys.platform == "win32":
            return os.path.join(
                os.environ.get("PROGRAMDATA", "C:\\ProgramData"),
                "StoppedServicesLogger",
                "logs"
            )
        return "/var/log/stopped-services-logger"

    def _set_defaults(self):
        """
        Définit les valeurs de configuration par défaut

        Ces valeurs sont utilisées si aucun fichier n'est trouvé
        ou si certaines sections/clés sont manquantes.
        """
        self.config.add_section('inventory')
        self.config.set('inventory', 'log_path', os.path.join(self._get_default_logs_dir(), LOG_FILE_NAME))
        self.config.set('inventory', 'buffer_size', str(DEFAULT_BUFFER_SIZE))

        self.config.add_section('logging')
        self.config.set('logging', 'log_level', 'INFO')
        self.config.set('logging', 'diagnostic_file', '')
        self.config.set('logging', 'max_log_size', '10485760')  # 10MB
        self.config.set('logging', 'backup_count', '5')

    def _load_config(self):
        """
        Charge la configuration depuis le fichier

        Si le fichier n'existe pas, utilise les valeurs par défaut.
        En cas d'erreur de lecture, conserve l'erreur et continue avec les défauts.
        """
        if not os.path.exists(self.config_file):
            return

        try:
            file_config = configparser.ConfigParser(interpolation=None)
            with open(self.config_file, 'r', encoding='utf-8') as f:
                file_config.read_file(f)
        except (OSError, configparser.Error) as e:
            self.load_errors.append(f"Erreur lors du chargement de la configuration: {e}")
            return

        for section_name in file_config.sections():
            if not self.config.has_section(section_name):
                self.config.add_section(section_name)
            for option, value in file_config.items(section_name):
                self.config.set(section_name, option, value)

        self.loaded = True

    def get(self, section: str, option: str, fallback: Any = None) -> str:
        """
        Récupère une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            fallback: Valeur par défaut si non trouvée

        Returns:
            str: Valeur de configuration
        """
        return self.config.get(section, option, fallback=fallback)

    def getint(self, section: str, option: str, fallback: int = 0) -> int:
        """
        Récupère une valeur entière de configuration

        Returns:
            int: Valeur entière, fallback si la valeur n'est pas un entier
        """
        try:
            return self.config.getint(section, option, fallback=fallback)
        except ValueError:
            return fallback

    def set(self, section: str, option: str, value: Any):
        """
        Définit une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            value: Nouvelle valeur
        """
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, option, str(value))

    def save(self):
        """
        Sauvegarde la configuration dans le fichier

        Crée les dossiers parents si nécessaire. Les erreurs d'écriture
        sont propagées à l'appelant.
        """
        config_dir = os.path.dirname(self.config_file)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            self.config.write(f)

    @property
    def log_path(self) -> str:
        return self.get('inventory', 'log_path', '')

    @property
    def buffer_size(self) -> int:
        return self.getint('inventory', 'buffer_size', DEFAULT_BUFFER_SIZE)

    def get_logging_config(self) -> Dict[str, Any]:
        """
        Récupère la configuration complète du logging de diagnostic

        Returns:
            dict: Configuration logging
        """
        return {
            'log_level': self.get('logging', 'log_level', 'INFO').upper(),
            'diagnostic_file': self.get('logging', 'diagnostic_file', ''),
            'max_log_size': self.getint('logging', 'max_log_size', 10485760),
            'backup_count': self.getint('logging', 'backup_count', 5)
        }

    def get_inventory_config(self) -> Dict[str, Any]:
        """
        Récupère la configuration complète du journal d'inventaire

        Returns:
            dict: Configuration inventaire
        """
        return {
            'log_path': self.log_path,
            'buffer_size': self.buffer_size
        }

    def get_errors(self) -> List[str]:
        """
        Valide la configuration courante

        Returns:
            list: Messages d'erreur, vide si la configuration est valide
        """
        errors = list(self.load_errors)

        if not self.log_path.strip():
            errors.append("Chemin du journal vide")

        raw_size = self.get('inventory', 'buffer_size', '')
        try:
            buffer_size = int(raw_size)
        except (TypeError, ValueError):
            errors.append(f"Taille de tampon invalide: {raw_size!r} (doit être un entier)")
        else:
            if not (MIN_BUFFER_SIZE <= buffer_size <= MAX_BUFFER_SIZE):
                errors.append(
                    f"Taille de tampon invalide: {buffer_size} "
                    f"(doit être entre {MIN_BUFFER_SIZE} et {MAX_BUFFER_SIZE})"
                )

        log_level = self.get('logging', 'log_level', 'INFO')
        if log_level.upper() not in LOG_LEVELS:
            errors.append("Niveau de log invalide")

        return errors

    def validate(self) -> bool:
        """
        Valide la configuration courante

        Returns:
            bool: True si la configuration est valide, False sinon
        """
        return not self.get_errors()


# Fonction utilitaire pour créer une configuration par défaut
def create_default_config(config_path: str) -> SnapshotConfig:
    """
    Crée un fichier de configuration par défaut

    Args:
        config_path: Chemin où créer le fichier de configuration

    Returns:
        SnapshotConfig: Instance de configuration créée
    """
    config = SnapshotConfig(config_path)
    config.save()
    return config
