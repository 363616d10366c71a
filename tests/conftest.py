"""Shared fixtures: a stand-in for subprocess.run and sample services."""

import subprocess

import pytest

from svcctl.core import service_manager
from svcctl.models.service import Broker, Cluster, Connector, DBConnector, Service, ServiceConfig


class FakeRun:
    """Records command lines and answers them from a table.

    Unknown commands succeed with empty output.
    """

    def __init__(self):
        self.calls = []
        self.responses = {}

    def set(self, cmd, stdout="", returncode=0, raises=None):
        self.responses[tuple(cmd)] = (stdout, returncode, raises)

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        stdout, returncode, raises = self.responses.get(tuple(cmd), ("", 0, None))
        if raises is not None:
            raise raises
        if isinstance(stdout, bytes):
            # Decode the way subprocess.run does for the given arguments
            stdout = stdout.decode(kwargs.get("encoding") or "utf-8",
                                   kwargs.get("errors") or "strict")
        if kwargs.get("check") and returncode != 0:
            raise subprocess.CalledProcessError(returncode, cmd, output=stdout)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(service_manager.subprocess, "run", fake)
    return fake


@pytest.fixture
def sample_config():
    return ServiceConfig(
        local_broker=Broker(ip="127.0.0.1", port="1883", login="edge", password="secret"),
        network_broker=Broker(ip="10.0.0.5", port="8883", login="cloud", password="hunter2",
                              ca_path="/etc/ssl/ca.pem", key_path="/etc/ssl/client.key"),
        db=DBConnector(
            client_ip="127.0.0.1",
            client_port="9042",
            db_cluster=Cluster(connectors=[Connector("10.0.0.10", "9042"),
                                           Connector("10.0.0.11", "9042")]),
        ),
        log_level="DEBUG",
    )


@pytest.fixture
def services():
    return {
        "a": Service(name="alpha", units=["alpha.service"], package_name="alpha-pkg"),
        "b": Service(name="beta", units=["beta.service", "beta.timer"], package_name="beta-pkg"),
    }
