"""
Configuration module.

Exports:
    Settings: Importer settings model
    get_settings: Cached settings loader
    IMPORT_PLAN: Ordered content-type mappings (dependency order)
"""

from config.settings import Settings, get_settings
from config.import_plan import IMPORT_PLAN, get_mapping

__all__ = [
    "Settings",
    "get_settings",
    "IMPORT_PLAN",
    "get_mapping",
]
