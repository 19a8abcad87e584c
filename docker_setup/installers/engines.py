#!/usr/bin/env python3

import logging
import docker
import requests
from abc import ABC, abstractmethod
from docker.errors import DockerException
from typing import Dict, Optional, Type

from ..config.manager import ConfigManager
from ..console.reporter import Reporter
from ..distro.models import Distribution
from ..exceptions import InstallationError, RepositoryError
from ..repository.keys import install_signing_key
from ..repository.sources import AptSource, detect_architecture, detect_codename, write_source_list
from ..system.package_manager import PackageManager
from ..system.runner import CommandRunner
from ..systemd.service_manager import ServiceManager

logger = logging.getLogger(__name__)

class DockerInstaller(ABC):
    """Fixed installation pipeline for one distribution.

    Steps that leave later steps unable to succeed raise InstallationError.
    Steps that only degrade a secondary feature warn and continue.
    """

    def __init__(self, distribution: Distribution, config_manager: ConfigManager,
                 runner: CommandRunner, reporter: Reporter, user: Optional[str] = None):
        self.distribution = distribution
        self.config_manager = config_manager
        self.config = config_manager.get_config()
        self.dist_config = config_manager.get_distribution(distribution)
        self.runner = runner
        self.reporter = reporter
        self.user = user
        self.package_manager = PackageManager(distribution.family, runner)

    @abstractmethod
    def add_repository(self) -> None:
        pass

    def prepare(self) -> None:
        pass

    def start_service(self) -> None:
        pass

    def install(self) -> None:
        self.reporter.info(f"Installing Docker on {self.dist_config.display_name}...")

        self.prepare()
        self.install_prerequisites()
        self.add_repository()
        self.install_packages()
        self.start_service()
        self.verify_installation()
        self.grant_group_access()

        self.reporter.success(f"Docker and Docker Compose installed successfully on {self.dist_config.display_name}!")
        self.reporter.info(
            f"Please log out and log back in to apply group changes, or run 'newgrp {self.config.docker_group}'."
        )

    def install_prerequisites(self) -> None:
        if not self.package_manager.install(self.dist_config.prerequisites or [], elevate=True):
            self.reporter.warn("Some prerequisites failed to install. Attempting to continue...")

    def install_packages(self) -> None:
        if not self.package_manager.install(self.config.docker_packages, elevate=True):
            raise InstallationError("Failed to install Docker packages.")

        if not self.package_manager.install([self.config.compose_package], elevate=True):
            self.reporter.warn("Docker Compose plugin installation failed. Docker Compose will not be available.")

    def verify_installation(self) -> None:
        version = self.runner.output(["docker", "--version"], elevate=True)
        if version is None:
            raise InstallationError("Docker installation verification failed.")
        self.reporter.echo(version)

        compose_version = self.runner.output(["docker", "compose", "version"], elevate=True)
        if compose_version is None:
            self.reporter.warn("Docker Compose not installed or not working.")
        else:
            self.reporter.echo(compose_version)

        self.check_daemon()

    def check_daemon(self) -> bool:
        """Ping the daemon through the Docker SDK"""
        client = None
        try:
            client = docker.from_env()
            client.ping()
            logger.info("Docker daemon is reachable")
            return True
        except (DockerException, requests.RequestException) as e:
            self.reporter.warn(f"Docker daemon is not reachable yet: {e}")
            return False
        finally:
            if client is not None:
                client.close()

    def grant_group_access(self) -> None:
        group = self.config.docker_group
        if not self.user:
            self.reporter.warn(f"Could not determine the invoking user. Add your account to the '{group}' group manually.")
            return

        if not self.runner.succeeds(["usermod", "-aG", group, self.user], elevate=True):
            self.reporter.warn(f"Failed to add user to {group} group. You may need to run Docker with sudo.")
            return

        logger.info(f"Added {self.user} to group {group}")

class AptDockerInstaller(DockerInstaller):
    """Debian and Ubuntu: signed source list under sources.list.d"""

    def prepare(self) -> None:
        if not self.package_manager.refresh_index(elevate=True):
            raise InstallationError("Failed to update package index.")

    def add_repository(self) -> None:
        install_signing_key(
            self.runner,
            self.dist_config.signing_key_url,
            self.config.keyring_path,
            timeout=self.config.key_download_timeout
        )

        codename = detect_codename(
            self.runner,
            self.reporter,
            self.dist_config.codename_key,
            self.config.os_release_path
        )
        source = AptSource(
            architecture=detect_architecture(self.runner),
            keyring_path=self.config.keyring_path,
            url=self.dist_config.repository_url.rstrip('/'),
            codename=codename,
            channel=self.config.repository_channel
        )
        write_source_list(source, self.config.source_list_path)

        if not self.package_manager.refresh_index(elevate=True):
            raise InstallationError("Failed to update package index after adding Docker repo.")

class DnfDockerInstaller(DockerInstaller):
    """Rocky Linux: repository added through dnf config-manager"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.service_manager = ServiceManager(self.runner)

    def add_repository(self) -> None:
        if not self.package_manager.add_repository(self.dist_config.repository_url, elevate=True):
            raise RepositoryError("Failed to add Docker repository.")

    def start_service(self) -> None:
        if not self.dist_config.start_service:
            return

        service = self.config.service_name
        if not self.service_manager.start_service(service):
            raise InstallationError("Failed to start Docker service.")

        if not self.service_manager.enable_service(service):
            self.reporter.warn("Failed to enable Docker service on boot.")

INSTALLERS: Dict[Distribution, Type[DockerInstaller]] = {
    Distribution.DEBIAN: AptDockerInstaller,
    Distribution.UBUNTU: AptDockerInstaller,
    Distribution.ROCKY: DnfDockerInstaller,
}

def get_installer(distribution: Distribution, config_manager: ConfigManager, runner: CommandRunner,
                  reporter: Reporter, user: Optional[str] = None) -> DockerInstaller:
    installer_class = INSTALLERS.get(distribution)
    if installer_class is None:
        raise ValueError(f"Unknown distribution: {distribution}")
    return installer_class(distribution, config_manager, runner, reporter, user=user)
