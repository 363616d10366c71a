"""Loading and saving of service configuration files and service manifests."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..exceptions import ConfigIOError, SerializationError
from ..models.service import Service, ServiceConfig
from ..utils.constants import CONFIG_FILE_MODE

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Expected JSON types of the top-level service descriptor fields
_SERVICE_FIELDS = {
    "name": str,
    "units": list,
    "version": str,
    "packageName": str,
    "config": dict,
    "configPath": str,
}


def read_service_config(path: PathLike) -> ServiceConfig:
    """Load a service configuration file.

    A file that exists but does not hold a JSON object is not an error: it
    yields an empty config. The log level defaults to INFO when unset.

    Args:
        path: Path to the JSON config file

    Returns:
        ServiceConfig with defaults applied

    Raises:
        ConfigIOError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigIOError(f"Failed to read config file {path}", str(e), path=str(path)) from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Malformed JSON in {path}, using empty config: {e}")
        data = {}

    if not isinstance(data, dict):
        logger.warning(f"Config file {path} does not hold a JSON object, using empty config")
        data = {}

    try:
        config = ServiceConfig.from_dict(data)
    except (AttributeError, TypeError) as e:
        logger.warning(f"Unexpected config layout in {path}, using empty config: {e}")
        config = ServiceConfig()

    logger.debug(f"Loaded config from {path}")
    return config.apply_defaults()


def write_service_config(path: PathLike, config: ServiceConfig):
    """Save a service configuration file, replacing any existing one.

    Args:
        path: Destination path
        config: Configuration to write

    Raises:
        SerializationError: If the config cannot be encoded as JSON
        ConfigIOError: If the file cannot be written
    """
    path = Path(path)
    payload = config.to_json()

    # Write to temp file first (atomic write)
    temp_file = path.with_name(path.name + ".tmp")
    try:
        temp_file.write_text(payload)
        os.chmod(temp_file, CONFIG_FILE_MODE)
        temp_file.replace(path)
    except OSError as e:
        try:
            temp_file.unlink()
        except OSError:
            pass
        raise ConfigIOError(f"Failed to write config file {path}", str(e), path=str(path)) from e

    logger.info(f"Saved config to {path}")


def _check_fields(data: dict):
    for key, kind in _SERVICE_FIELDS.items():
        value = data.get(key)
        if value is not None and not isinstance(value, kind):
            raise TypeError(f"{key}: expected {kind.__name__}, got {type(value).__name__}")
    for unit in data.get("units") or []:
        if not isinstance(unit, str):
            raise TypeError(f"units: expected str items, got {type(unit).__name__}")


def to_service(value: Any) -> Service:
    """Convert a dynamically typed service descriptor to a Service.

    The value goes through a JSON round trip, so anything JSON can encode is
    accepted; a str or bytes value is taken to be JSON text already.

    Args:
        value: Mapping or JSON text describing the service

    Returns:
        Service instance

    Raises:
        SerializationError: If the value cannot be encoded, or does not decode
            to a service descriptor. In the latter case ``partial`` holds an
            empty Service.
    """
    if isinstance(value, (str, bytes)):
        text = value
    else:
        try:
            text = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise SerializationError("Service descriptor is not JSON serializable", str(e)) from e

    try:
        data = json.loads(text)
    except ValueError as e:
        raise SerializationError("Invalid service descriptor JSON", str(e), partial=Service()) from e

    if not isinstance(data, dict):
        raise SerializationError("Service descriptor must be an object",
                                 f"got {type(data).__name__}", partial=Service())

    try:
        _check_fields(data)
        return Service.from_dict(data)
    except (AttributeError, TypeError) as e:
        raise SerializationError("Service descriptor does not match", str(e), partial=Service()) from e


def load_services(path: PathLike) -> Dict[str, Service]:
    """Load a manifest of service descriptors.

    The manifest is YAML (or JSON) holding a mapping of key to descriptor,
    either at the top level or under a ``services`` key. Descriptors without a
    name take their key as name. Entries that cannot be converted are logged
    and skipped.

    Args:
        path: Path to the manifest

    Returns:
        Mapping of key to Service

    Raises:
        ConfigIOError: If the manifest cannot be read
        SerializationError: If the manifest is not valid YAML or not a mapping
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigIOError(f"Failed to read service manifest {path}", str(e), path=str(path)) from e
    except yaml.YAMLError as e:
        raise SerializationError(f"YAML parsing error in {path}", str(e)) from e

    if not data:
        logger.warning(f"Empty service manifest {path}")
        return {}

    if isinstance(data, dict) and "services" in data:
        data = data["services"] or {}

    if not isinstance(data, dict):
        raise SerializationError(f"Service manifest {path} must be a mapping",
                                 f"got {type(data).__name__}")

    services = {}
    for key, descriptor in data.items():
        try:
            service = to_service(descriptor)
        except SerializationError as e:
            logger.error(f"Failed to load service {key}: {e}")
            continue
        if not service.name:
            service.name = str(key)
        services[str(key)] = service

    logger.info(f"Loaded {len(services)} services from {path}")
    return services


class ConfigManager:
    """Reads and writes the configuration file of one service."""

    def __init__(self, service: Service):
        """Initialize the config manager.

        Args:
            service: Service whose config_path and config are managed
        """
        self.service = service

    @property
    def path(self) -> Path:
        if not self.service.config_path:
            raise ValueError(f"Service {self.service.name} has no config path")
        return Path(self.service.config_path)

    def load(self) -> ServiceConfig:
        """Read the config file into the service.

        Returns:
            The loaded ServiceConfig
        """
        self.service.config = read_service_config(self.path)
        return self.service.config

    def save(self):
        """Write the service's current config to its config file."""
        write_service_config(self.path, self.service.config)
