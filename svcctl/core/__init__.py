"""Core functionality for OS service management."""

from .service_manager import ServiceManager
from .config_manager import (
    ConfigManager,
    load_services,
    read_service_config,
    to_service,
    write_service_config,
)
from .base import ManagedService

__all__ = ["ServiceManager", "ConfigManager", "ManagedService", "load_services",
           "read_service_config", "to_service", "write_service_config"]
