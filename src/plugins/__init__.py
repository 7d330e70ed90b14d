"""
Weekly Update Runner - Plugins Package
"""

from plugins.base import PackageManagerPlugin, StepResult
from plugins.apt import APTPlugin
from plugins.flatpak import FlatpakPlugin

__all__ = [
    "PackageManagerPlugin",
    "StepResult",
    "APTPlugin",
    "FlatpakPlugin",
]
