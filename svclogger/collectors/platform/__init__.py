"""
Package des fournisseurs spécifiques par plateforme

Ce package contient les fournisseurs qui utilisent les outils
de gestion des services de chaque système d'exploitation :
- Windows (Service Control Manager via psutil)
- Linux (systemd via systemctl)
- macOS (launchd via launchctl)
"""

import sys

from ..base import BaseServiceProvider
from ...core.errors import QueryError


def get_service_provider(logger, platform: str = None) -> BaseServiceProvider:
    """
    Sélectionne le fournisseur adapté à la plateforme courante

    Args:
        logger: Instance de SnapshotLogger
        platform: Identifiant de plateforme (sys.platform par défaut)

    Returns:
        BaseServiceProvider: Fournisseur de la plateforme

    Raises:
        QueryError: Si la plateforme n'est pas supportée
    """
    platform = platform or sys.platform

    if platform == "win32":
        from .windows import WindowsServiceProvider
        return WindowsServiceProvider(logger)
    elif platform.startswith("linux"):
        from .linux import LinuxServiceProvider
        return LinuxServiceProvider(logger)
    elif platform == "darwin":
        from .macos import MacOSServiceProvider
        return MacOSServiceProvider(logger)

    raise QueryError(f"Plateforme non supportée: {platform}")
