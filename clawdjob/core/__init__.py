"""Core functionality for the clawdjob package."""

from .logging import setup_logging
from .config import Settings, get_settings
from .storage import Storage, get_storage

__all__ = [
    'setup_logging',
    'Settings',
    'get_settings',
    'Storage',
    'get_storage',
]
