"""Base class for long-running services driven by a config file."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..models.service import ServiceConfig
from ..utils.logging_setup import apply_log_level
from .config_manager import PathLike, read_service_config

logger = logging.getLogger(__name__)


class ManagedService(ABC):
    """A service with an initialize/run/stop lifecycle.

    Subclasses implement run() and stop(); initialize() loads the config file
    and applies its log level before run() is called.
    """

    def __init__(self):
        self.config: Optional[ServiceConfig] = None
        self.config_file: Optional[str] = None

    def initialize(self, conf_file: PathLike):
        """Load the service configuration.

        Args:
            conf_file: Path to the JSON config file

        Raises:
            ConfigIOError: If the file cannot be read
        """
        self.config = read_service_config(conf_file)
        self.config_file = str(conf_file)
        apply_log_level(self.config.log_level)
        logger.info(f"Initialized {self.__class__.__name__} from {conf_file}")

    @abstractmethod
    def run(self):
        """Run the service until stop() is called or it fails."""

    @abstractmethod
    def stop(self):
        """Stop the service."""
