"""
Newsflash Config — Public API
===============================
"""

from newsflash.config.settings import DEFAULT_SEPARATOR, BusConfig

__all__ = [
    "BusConfig",
    "DEFAULT_SEPARATOR",
]
