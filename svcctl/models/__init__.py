"""Data models."""

from .service import (
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

__all__ = ["Broker", "Cluster", "Connector", "DBConnector", "ProbeResult", "Service",
           "ServiceConfig", "ServiceState", "ServiceStatus"]
