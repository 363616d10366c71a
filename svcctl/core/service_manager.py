"""Service manager for OS services via systemctl and the package manager."""

import subprocess
import logging
from typing import Dict, List, Mapping, Optional
from ..exceptions import CommandError
from ..models.service import ProbeResult, Service, ServiceState, ServiceStatus
from ..utils.constants import (
    ACTIVE_OUTPUT,
    DEFAULT_TIMEOUT,
    DISABLED_OUTPUT,
    FAILED_OUTPUT,
    PACKAGE_MANAGER,
    PACKAGE_QUERY,
    PACKAGE_TIMEOUT,
    PRIVILEGE_PREFIX,
    SYSTEMCTL,
    VERSION_PREFIX,
)

logger = logging.getLogger(__name__)


def _to_text(output) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


class ServiceManager:
    """Manages OS services and their packages via external commands."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, package_timeout: int = PACKAGE_TIMEOUT,
                 privileged: bool = False):
        """Initialize the service manager.

        Args:
            timeout: Seconds to wait for service manager commands
            package_timeout: Seconds to wait for package install/remove
            privileged: Prefix mutating commands with pkexec
        """
        self.timeout = timeout
        self.package_timeout = package_timeout
        self.privileged = privileged

    def probe(self, *args: str) -> ProbeResult:
        """Run a query command and capture its output.

        The exit code does not make a probe fail: systemctl reports inactive
        units with a non-zero status. Only a command that could not be run to
        completion gives a result with ``executed`` False.

        Args:
            args: Command line to run

        Returns:
            ProbeResult for the command
        """
        cmd = list(args)
        logger.debug(f"Exec: {cmd}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout
            )

        except subprocess.TimeoutExpired:
            error_msg = f"Timeout after {self.timeout}s"
            logger.error(f"{error_msg} running {' '.join(cmd)}")
            return ProbeResult(cmd, error=error_msg)

        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Failed to run {' '.join(cmd)}: {e}")
            return ProbeResult(cmd, error=str(e))

        return ProbeResult(cmd, output=result.stdout.strip(), returncode=result.returncode)

    def get_service_status(self, service: Service, strict: bool = False) -> ServiceState:
        """Get the current state of a service.

        Failure takes precedence over the enabled check: a failed unit reports
        FAILED whether or not it is enabled.

        Args:
            service: Service to query
            strict: Raise instead of treating a probe that could not run as
                empty output

        Returns:
            ServiceState enum value

        Raises:
            CommandError: If strict and systemctl could not be run
        """
        active = self._status_probe("is-active", service.name, strict)
        if active == FAILED_OUTPUT:
            return ServiceState.FAILED
        if active == ACTIVE_OUTPUT:
            return ServiceState.RUNNING

        enabled = self._status_probe("is-enabled", service.name, strict)
        if enabled == DISABLED_OUTPUT:
            return ServiceState.STOPPED
        return ServiceState.MISSING

    def get_service_statuses(self, services: Mapping[str, Service]) -> Dict[str, ServiceStatus]:
        """Get the current state of several services.

        Args:
            services: Mapping of key to service

        Returns:
            Mapping of the same keys to ServiceStatus
        """
        return {
            key: ServiceStatus(service, self.get_service_status(service))
            for key, service in services.items()
        }

    def install(self, service: Service) -> str:
        """Install the package providing a service.

        Args:
            service: Service whose package_name is installed

        Returns:
            Combined stdout and stderr of the package manager

        Raises:
            CommandError: If the package manager fails
        """
        return self._execute_action([PACKAGE_MANAGER, "install", "-y"], service.package_name,
                                    self.package_timeout)

    def remove(self, service: Service) -> str:
        """Remove the package providing a service.

        Args:
            service: Service whose package_name is removed

        Returns:
            Combined stdout and stderr of the package manager

        Raises:
            CommandError: If the package manager fails
        """
        return self._execute_action([PACKAGE_MANAGER, "remove", "-y"], service.package_name,
                                    self.package_timeout)

    def start(self, service: Service) -> str:
        """Start a service.

        Returns:
            Combined stdout and stderr of systemctl

        Raises:
            CommandError: If systemctl fails
        """
        return self._execute_action([SYSTEMCTL, "start"], service.name, self.timeout)

    def stop(self, service: Service) -> str:
        """Stop a service.

        Returns:
            Combined stdout and stderr of systemctl

        Raises:
            CommandError: If systemctl fails
        """
        return self._execute_action([SYSTEMCTL, "stop"], service.name, self.timeout)

    def install_packages(self, services: Mapping[str, Service]):
        """Install the packages of all services, continuing past failures."""
        for key, service in services.items():
            try:
                self.install(service)
            except CommandError as e:
                logger.error(f"Failed to install package for {key}: {e}")

    def start_services(self, services: Mapping[str, Service]):
        """Start every service that is not already running, continuing past failures."""
        for key, service in services.items():
            if self.get_service_status(service) is ServiceState.RUNNING:
                logger.debug(f"{service.name} already running, not starting")
                continue
            try:
                self.start(service)
            except CommandError as e:
                logger.error(f"Failed to start {key}: {e}")

    def remove_services(self, services: Mapping[str, Service]):
        """Stop each service and remove its package, continuing past failures."""
        for key, service in services.items():
            try:
                self.stop(service)
            except CommandError as e:
                logger.error(f"Failed to stop {key}: {e}")
            try:
                self.remove(service)
            except CommandError as e:
                logger.error(f"Failed to remove package for {key}: {e}")

    def get_package_version(self, package_name: str) -> Optional[str]:
        """Get the installed version of a package.

        Args:
            package_name: Name of the package

        Returns:
            Version string, or None if the query failed or printed no version
        """
        result = self.probe(*PACKAGE_QUERY, package_name)
        if not result.succeeded:
            logger.debug(f"Could not query version of {package_name}: "
                         f"{result.error or f'exit status {result.returncode}'}")
            return None

        for line in result.output.splitlines():
            if line.startswith(VERSION_PREFIX):
                parts = line.split(" ")
                if len(parts) < 2 or not parts[1].strip():
                    logger.warning(f"Malformed version line for {package_name}: {line!r}")
                    return None
                return parts[1].strip()
        return None

    def _status_probe(self, action: str, service_name: str, strict: bool) -> str:
        result = self.probe(SYSTEMCTL, action, service_name)
        if not result.executed:
            if strict:
                raise CommandError(f"Failed to query {service_name}", result.args,
                                   detail=result.error)
            return ""
        return result.output

    def _execute_action(self, base: List[str], target: str, timeout: int) -> str:
        """Execute a mutating command (install, remove, start, stop).

        Args:
            base: Command and subcommand, e.g. ['systemctl', 'start']
            target: Service or package name
            timeout: Seconds to wait for the command

        Returns:
            Combined stdout and stderr

        Raises:
            CommandError: On non-zero exit, spawn failure or timeout
        """
        cmd = []
        if self.privileged:
            cmd.extend(PRIVILEGE_PREFIX)
        cmd.extend(base)
        cmd.append(target)
        action = " ".join(base)
        logger.debug(f"Exec: {cmd}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=True
            )

        except subprocess.TimeoutExpired as e:
            error_msg = f"Timeout while running {action} {target}"
            logger.error(error_msg)
            raise CommandError(error_msg, cmd, output=_to_text(e.output),
                               detail=f"no exit after {timeout}s") from e

        except subprocess.CalledProcessError as e:
            output = _to_text(e.output)
            error_msg = f"Failed to run {action} {target}"
            logger.error(f"{error_msg}: exit status {e.returncode}")
            raise CommandError(error_msg, cmd, returncode=e.returncode, output=output,
                               detail=output.strip() or f"exit status {e.returncode}") from e

        except OSError as e:
            error_msg = f"Failed to run {action} {target}"
            logger.error(f"{error_msg}: {e}")
            raise CommandError(error_msg, cmd, detail=str(e)) from e

        logger.info(f"Successfully ran {action} {target}")
        return result.stdout
