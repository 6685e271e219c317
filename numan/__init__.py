"""Top-level package for numan."""

from .config import Settings, get_settings
from .exceptions import (
    ConfigCorruptError,
    DirectoryUnreadableError,
    InputValidationError,
    MalformedVersionError,
    NumanError,
    UploadTransportError,
)
from .models import Configuration, PackageRecord, Version, compare, parse_archive_name
from .registry_client import RegistryClient, UploadResult
from .scanner import ArchiveEntry, find_newest, scan_directory
from .store import ConfigStore
from .utils.tb_logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "NumanError",
    "InputValidationError",
    "ConfigCorruptError",
    "DirectoryUnreadableError",
    "UploadTransportError",
    "MalformedVersionError",
    "Version",
    "PackageRecord",
    "Configuration",
    "compare",
    "parse_archive_name",
    "RegistryClient",
    "UploadResult",
    "ArchiveEntry",
    "scan_directory",
    "find_newest",
    "ConfigStore",
    "get_logger",
    "setup_logging",
]
