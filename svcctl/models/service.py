"""Data models for managed OS services and their configuration."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..exceptions import SerializationError
from ..utils.constants import DEFAULT_LOG_LEVEL


class ServiceState(Enum):
    """Enumeration of possible service states."""

    RUNNING = "running"
    FAILED = "failed"
    STOPPED = "stopped"
    MISSING = "missing"


def _str(value) -> str:
    # Non-string JSON values (null, numbers) decode to the zero value
    return value if isinstance(value, str) else ""


@dataclass
class Broker:
    """Messaging endpoint configuration.

    Attributes:
        ip: Broker host address
        port: Broker port
        login: Username
        password: Password
        ca_path: Path to the CA certificate
        key_path: Path to the client key
    """

    ip: str = ""
    port: str = ""
    login: str = ""
    password: str = ""
    ca_path: str = ""
    key_path: str = ""

    def to_dict(self) -> dict:
        return {
            "ip": self.ip,
            "port": self.port,
            "login": self.login,
            "password": self.password,
            "caPath": self.ca_path,
            "keyPath": self.key_path,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Broker':
        return cls(
            ip=_str(data.get("ip")),
            port=_str(data.get("port")),
            login=_str(data.get("login")),
            password=_str(data.get("password")),
            ca_path=_str(data.get("caPath")),
            key_path=_str(data.get("keyPath")),
        )


@dataclass
class Connector:
    """A single database node endpoint."""

    ip: str = ""
    port: str = ""

    def to_dict(self) -> dict:
        return {"ip": self.ip, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict) -> 'Connector':
        return cls(ip=_str(data.get("ip")), port=_str(data.get("port")))


@dataclass
class Cluster:
    """Database node list forming one logical cluster."""

    connectors: List[Connector] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"connectors": [c.to_dict() for c in self.connectors]}

    @classmethod
    def from_dict(cls, data: dict) -> 'Cluster':
        return cls(connectors=[Connector.from_dict(c) for c in data.get("connectors") or []])


@dataclass
class DBConnector:
    """Database client settings.

    Attributes:
        client_ip: Address the client binds to
        client_port: Port the client binds to
        db_cluster: Nodes of the database cluster
    """

    client_ip: str = ""
    client_port: str = ""
    db_cluster: Cluster = field(default_factory=Cluster)

    def to_dict(self) -> dict:
        return {
            "clientIp": self.client_ip,
            "clientPort": self.client_port,
            "dbCluster": self.db_cluster.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DBConnector':
        return cls(
            client_ip=_str(data.get("clientIp")),
            client_port=_str(data.get("clientPort")),
            db_cluster=Cluster.from_dict(data.get("dbCluster") or {}),
        )


@dataclass
class ServiceConfig:
    """Configuration file contents of a managed service.

    Attributes:
        local_broker: Broker on the local host
        network_broker: Broker reachable over the network
        db: Database connector settings
        log_level: Logging level name (e.g. 'INFO', 'DEBUG')
    """

    local_broker: Broker = field(default_factory=Broker)
    network_broker: Broker = field(default_factory=Broker)
    db: DBConnector = field(default_factory=DBConnector)
    log_level: str = ""

    def apply_defaults(self) -> 'ServiceConfig':
        """Fill in default values for unset fields.

        Returns:
            The same config, for chaining
        """
        if not self.log_level:
            self.log_level = DEFAULT_LOG_LEVEL
        return self

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation using the on-disk key names
        """
        return {
            "localBroker": self.local_broker.to_dict(),
            "networkBroker": self.network_broker.to_dict(),
            "db": self.db.to_dict(),
            "logLevel": self.log_level,
        }

    def to_json(self) -> str:
        """Serialize to a JSON string.

        Raises:
            SerializationError: If a field holds a value JSON cannot encode
        """
        try:
            return json.dumps(self.to_dict())
        except (TypeError, ValueError) as e:
            raise SerializationError("Failed to serialize service config", str(e)) from e

    @classmethod
    def from_dict(cls, data: dict) -> 'ServiceConfig':
        """Create ServiceConfig from dictionary.

        Missing keys keep their zero values; no defaults are applied here.

        Args:
            data: Dictionary with the on-disk key names

        Returns:
            ServiceConfig instance
        """
        return cls(
            local_broker=Broker.from_dict(data.get("localBroker") or {}),
            network_broker=Broker.from_dict(data.get("networkBroker") or {}),
            db=DBConnector.from_dict(data.get("db") or {}),
            log_level=_str(data.get("logLevel")),
        )


@dataclass
class Service:
    """Descriptor of an OS service backed by a package.

    Attributes:
        name: Service manager unit name, also the identity of the service
        units: Systemd unit names belonging to the service
        version: Installed or expected package version
        package_name: Name of the package providing the service
        config: Service configuration
        config_path: Path to the service's configuration file
    """

    name: str = ""
    units: List[str] = field(default_factory=list)
    version: str = ""
    package_name: str = ""
    config: ServiceConfig = field(default_factory=ServiceConfig)
    config_path: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "units": list(self.units),
            "version": self.version,
            "packageName": self.package_name,
            "config": self.config.to_dict(),
            "configPath": self.config_path,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Service':
        return cls(
            name=_str(data.get("name")),
            units=list(data.get("units") or []),
            version=_str(data.get("version")),
            package_name=_str(data.get("packageName")),
            config=ServiceConfig.from_dict(data.get("config") or {}),
            config_path=_str(data.get("configPath")),
        )


@dataclass
class ServiceStatus:
    """A service together with its last computed state.

    Attributes:
        service: The service descriptor
        state: Current state, or None if not computed
    """

    service: Service
    state: Optional[ServiceState] = None

    def get_state_str(self) -> str:
        """Get human-readable state string.

        Returns:
            State value, or 'unknown' if not computed
        """
        if self.state is None:
            return "unknown"
        return self.state.value


@dataclass
class ProbeResult:
    """Outcome of a single query command.

    Attributes:
        args: Command line that was run
        output: Stripped standard output
        returncode: Exit code, or None if the process never completed
        error: Description of why the process did not complete
    """

    args: List[str]
    output: str = ""
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def executed(self) -> bool:
        """True if the process ran to completion, whatever its exit code."""
        return self.returncode is not None

    @property
    def succeeded(self) -> bool:
        """True if the process ran and exited zero."""
        return self.returncode == 0
