#!/usr/bin/env python3

import os
import logging
from typing import List, Optional

from ..config.manager import ConfigManager
from ..console.reporter import Reporter
from ..distro.models import Distribution
from ..exceptions import DependencyError, PrivilegeError
from .package_manager import PackageManager
from .runner import CommandRunner

logger = logging.getLogger(__name__)

class DependencyBootstrapper:
    """Makes sure the tools the installers shell out to are on PATH"""

    def __init__(self, config_manager: ConfigManager, runner: CommandRunner, reporter: Reporter):
        self.config_manager = config_manager
        self.config = config_manager.get_config()
        self.runner = runner
        self.reporter = reporter

    def required_tools(self) -> List[str]:
        tools = ["curl"]
        if self.config.use_sudo:
            tools.append("sudo")
        return tools

    def bootstrap(self, distribution: Optional[Distribution]) -> None:
        for tool in self.required_tools():
            self.ensure_command(tool, distribution)

    def ensure_command(self, name: str, distribution: Optional[Distribution]) -> None:
        if self.runner.command_exists(name):
            self.reporter.info(f"{name} is installed.")
            return

        self.reporter.warn(f"{name} is not installed. Attempting to install it...")
        self._install_dependency(name, distribution)

    def _install_dependency(self, name: str, distribution: Optional[Distribution]) -> None:
        if distribution is None:
            raise DependencyError(f"Distribution not selected yet. Cannot install {name}.")

        if os.geteuid() != 0:
            raise PrivilegeError(
                f"Cannot install {name} without root privileges. "
                f"Please run this script with sudo or install {name} manually."
            )

        # May be installing sudo itself, so never elevate here
        package_manager = PackageManager(distribution.family, self.runner)

        if not package_manager.refresh_index():
            raise DependencyError(f"Failed to update package index while installing {name}.")

        if not package_manager.install([name]):
            raise DependencyError(f"Failed to install {name}. Please install it manually.")

        if not self.runner.command_exists(name):
            raise DependencyError(f"Failed to install {name}. Please install it manually and rerun the script.")

        self.reporter.info(f"{name} has been installed successfully.")
