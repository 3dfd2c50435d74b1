"""
Point d'entrée principal du Stopped Services Logger

Une invocation prend un instantané des services arrêtés de l'hôte,
l'ajoute au journal puis se termine avec le code 0 (succès) ou 1 (échec).
"""

import sys
import argparse

from svclogger.core.config import SnapshotConfig, create_default_config
from svclogger.core.controller import RunController
from svclogger.core.logger import SnapshotLogger
from svclogger.collectors.platform import get_service_provider


def build_parser() -> argparse.ArgumentParser:
    """Construit l'analyseur des arguments de ligne de commande"""
    parser = argparse.ArgumentParser(
        description='Consigne les services système arrêtés dans un journal horodaté'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Chemin vers le fichier de configuration'
    )

    parser.add_argument(
        '--log-path',
        type=str,
        help='Fichier journal des services arrêtés'
    )

    parser.add_argument(
        '--buffer-size',
        type=int,
        help='Nombre de lignes mises en tampon avant chaque écriture (10 à 1000)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        help='Niveau du logging de diagnostic (DEBUG, INFO, WARNING, ERROR, CRITICAL)'
    )

    parser.add_argument(
        '--create-config',
        action='store_true',
        help='Crée un fichier de configuration par défaut'
    )

    parser.add_argument(
        '--validate-config',
        action='store_true',
        help='Valide la configuration actuelle'
    )

    return parser


def load_config(args) -> SnapshotConfig:
    """
    Charge la configuration et applique les surcharges de la ligne de commande

    Args:
        args: Arguments analysés

    Returns:
        SnapshotConfig: Configuration effective
    """
    config = SnapshotConfig(args.config)

    if args.log_path is not None:
        config.set('inventory', 'log_path', args.log_path)
    if args.buffer_size is not None:
        config.set('inventory', 'buffer_size', args.buffer_size)
    if args.log_level is not None:
        config.set('logging', 'log_level', args.log_level)

    return config


def main(argv=None) -> int:
    """
    Point d'entrée principal avec gestion des arguments de ligne de commande

    Returns:
        int: Code de sortie du processus
    """
    args = build_parser().parse_args(argv)

    # Créer une configuration par défaut
    if args.create_config:
        if not args.config:
            print("❌ --create-config requiert --config")
            return 1
        try:
            create_default_config(args.config)
        except OSError as e:
            print(f"❌ Erreur création configuration: {e}")
            return 1
        print(f"✅ Configuration par défaut créée: {args.config}")
        return 0

    config = load_config(args)

    errors = config.get_errors()
    if errors:
        for error in errors:
            print(f"❌ Erreur de configuration: {error}")
        return 1

    if args.validate_config:
        print("✅ Configuration valide")
        return 0

    logger = SnapshotLogger(config)
    logger.log_config_info(config)

    try:
        summary = RunController(config, logger, provider_factory=get_service_provider).run()
    except KeyboardInterrupt:
        print("\n🛑 Arrêt demandé par l'utilisateur")
        return 1
    except Exception:
        logger.exception("Erreur inattendue pendant l'instantané")
        return 1

    return summary.exit_code


if __name__ == '__main__':
    sys.exit(main())
