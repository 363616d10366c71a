"""Tests for the ManagedService lifecycle."""

import logging

import pytest

from svcctl.core.base import ManagedService
from svcctl.core.config_manager import write_service_config
from svcctl.exceptions import ConfigIOError


class EchoService(ManagedService):
    def __init__(self):
        super().__init__()
        self.running = False

    def run(self):
        self.running = True

    def stop(self):
        self.running = False


@pytest.fixture(autouse=True)
def restore_level():
    logger = logging.getLogger("svcctl")
    level = logger.level
    yield
    logger.setLevel(level)


def test_initialize_loads_config(tmp_path, sample_config):
    path = tmp_path / "service.json"
    write_service_config(path, sample_config)

    service = EchoService()
    service.initialize(path)
    assert service.config == sample_config
    assert service.config_file == str(path)
    assert logging.getLogger("svcctl").level == logging.DEBUG

    service.run()
    assert service.running
    service.stop()
    assert not service.running


def test_initialize_missing_file(tmp_path):
    with pytest.raises(ConfigIOError):
        EchoService().initialize(tmp_path / "absent.json")


def test_abstract():
    with pytest.raises(TypeError):
        ManagedService()


def test_initialize_numeric_log_level(tmp_path):
    path = tmp_path / "service.json"
    path.write_text('{"logLevel": 5}')

    service = EchoService()
    service.initialize(path)
    assert service.config.log_level == "INFO"
    assert logging.getLogger("svcctl").level == logging.INFO
