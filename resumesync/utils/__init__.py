"""
Utility modules for resumesync.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Collection names, sections and vocabularies
"""

from resumesync.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    PACKAGE_DIR,
    DATA_DIR,
)
from resumesync.utils.constants import (
    APP_NAME,
    VERSION,
    EMBEDDING_DIMENSION,
    LanguageProficiency,
    Section,
    SkillProficiency,
    StoredLanguageProficiency,
)
from resumesync.utils.logger import (
    setup_logging,
    get_logger,
    sanitize,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "PACKAGE_DIR",
    "DATA_DIR",
    # Constants
    "APP_NAME",
    "VERSION",
    "EMBEDDING_DIMENSION",
    "LanguageProficiency",
    "Section",
    "SkillProficiency",
    "StoredLanguageProficiency",
    # Logger
    "setup_logging",
    "get_logger",
    "sanitize",
    "log",
]
