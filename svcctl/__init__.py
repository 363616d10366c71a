"""svcctl - manage OS services, their packages and their config files."""

from .core import (
    ConfigManager,
    ManagedService,
    ServiceManager,
    load_services,
    read_service_config,
    to_service,
    write_service_config,
)
from .exceptions import CommandError, ConfigIOError, SerializationError, SvcctlError
from .models import (
    Broker,
    Cluster,
    Connector,
    DBConnector,
    ProbeResult,
    Service,
    ServiceConfig,
    ServiceState,
    ServiceStatus,
)
from .utils.constants import APP_VERSION as __version__
