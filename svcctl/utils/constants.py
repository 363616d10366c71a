"""Application constants and configuration."""

# Application metadata
APP_NAME = "svcctl"
APP_VERSION = "1.0.0"

# External executables
SYSTEMCTL = "systemctl"
PACKAGE_MANAGER = "apt-get"
PACKAGE_QUERY = ["dpkg", "-s"]
PRIVILEGE_PREFIX = ["pkexec"]

# Timeouts
DEFAULT_TIMEOUT = 10  # seconds, service manager calls
PACKAGE_TIMEOUT = 600  # seconds, package install/remove

# Service manager probe outputs
ACTIVE_OUTPUT = "active"
FAILED_OUTPUT = "failed"
DISABLED_OUTPUT = "disabled"
VERSION_PREFIX = "Version:"

# Config files
CONFIG_FILE_MODE = 0o644
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
