#!/usr/bin/env python3

import logging
from typing import List

from ..distro.models import PackageFamily
from .runner import CommandRunner

logger = logging.getLogger(__name__)

class PackageManager:
    """apt or dnf, driven through their documented CLIs"""

    def __init__(self, family: PackageFamily, runner: CommandRunner):
        self.family = family
        self.runner = runner

    @property
    def executable(self) -> str:
        return "apt" if self.family == PackageFamily.APT else "dnf"

    @property
    def has_index_refresh(self) -> bool:
        # dnf refreshes metadata on demand
        return self.family == PackageFamily.APT

    def refresh_index(self, elevate: bool = False) -> bool:
        if not self.has_index_refresh:
            logger.debug("dnf has no separate index refresh step")
            return True
        return self.runner.succeeds([self.executable, "update"], elevate=elevate)

    def install(self, packages: List[str], elevate: bool = False) -> bool:
        if not packages:
            return True
        logger.info(f"Installing packages with {self.executable}: {', '.join(packages)}")
        return self.runner.succeeds([self.executable, "install", "-y"] + list(packages), elevate=elevate)

    def add_repository(self, repo_url: str, elevate: bool = False) -> bool:
        if self.family != PackageFamily.DNF:
            raise ValueError("add_repository is only supported for dnf; APT repositories use source list files")
        return self.runner.succeeds(["dnf", "config-manager", "--add-repo", repo_url], elevate=elevate)
