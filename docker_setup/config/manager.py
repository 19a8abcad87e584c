#!/usr/bin/env python3

import os
import logging
import yaml
from typing import Dict, List, Optional
from dataclasses import dataclass, asdict

from ..distro.models import Distribution

logger = logging.getLogger(__name__)

@dataclass
class DistributionConfig:
    name: str
    display_name: str
    repository_url: str  # apt: repository base, dnf: .repo file
    prerequisites: List[str] = None
    codename_key: str = None  # os-release fallback key for APT codenames
    start_service: bool = False

    @property
    def signing_key_url(self) -> str:
        return f"{self.repository_url.rstrip('/')}/gpg"

@dataclass
class InstallerConfig:
    keyring_path: str = "/usr/share/keyrings/docker-archive-keyring.gpg"
    source_list_path: str = "/etc/apt/sources.list.d/docker.list"
    os_release_path: str = "/etc/os-release"
    repository_channel: str = "stable"
    docker_packages: List[str] = None
    compose_package: str = "docker-compose-plugin"
    docker_group: str = "docker"
    service_name: str = "docker"
    max_attempts: int = 5
    # Prefix pipeline commands with sudo, mirroring a manual install
    use_sudo: bool = True
    key_download_timeout: Optional[float] = None
    distributions: Dict[str, DistributionConfig] = None

    def __post_init__(self):
        if self.docker_packages is None:
            self.docker_packages = ["docker-ce", "docker-ce-cli", "containerd.io"]

        if self.distributions is None:
            self.distributions = self._get_default_distributions()

    def _get_default_distributions(self) -> Dict[str, DistributionConfig]:
        apt_prerequisites = ["apt-transport-https", "ca-certificates", "curl", "gnupg", "lsb-release"]
        return {
            "debian": DistributionConfig(
                name="debian",
                display_name="Debian",
                repository_url="https://download.docker.com/linux/debian",
                prerequisites=list(apt_prerequisites),
                codename_key="VERSION_CODENAME"
            ),
            "ubuntu": DistributionConfig(
                name="ubuntu",
                display_name="Ubuntu Server",
                repository_url="https://download.docker.com/linux/ubuntu",
                prerequisites=list(apt_prerequisites),
                codename_key="UBUNTU_CODENAME"
            ),
            "rocky": DistributionConfig(
                name="rocky",
                display_name="Rocky Linux",
                repository_url="https://download.docker.com/linux/centos/docker-ce.repo",
                prerequisites=["dnf-utils", "device-mapper-persistent-data", "lvm2"],
                start_service=True
            )
        }

class ConfigManager:
    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[InstallerConfig] = None

    def _get_default_config_path(self) -> str:
        xdg_config = os.environ.get('XDG_CONFIG_HOME', '~/.config')
        return os.path.expanduser(f"{xdg_config}/docker-setup/config.yaml")

    def load_config(self) -> InstallerConfig:
        if self._config is not None:
            return self._config

        if not os.path.exists(self.config_path):
            logger.info(f"No config file at {self.config_path}, using defaults")
            self._config = InstallerConfig()
            return self._config

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ValueError("top-level YAML value must be a mapping")

            # Per-distribution entries override the defaults field by field
            if 'distributions' in data:
                data['distributions'] = self._merge_distributions(data['distributions'] or {})

            self._config = InstallerConfig(**data)
            logger.info(f"Loaded config from {self.config_path}")
            return self._config

        except Exception as e:
            raise ValueError(f"Error loading config from {self.config_path}: {e}")

    def _merge_distributions(self, overrides: Dict[str, dict]) -> Dict[str, DistributionConfig]:
        distributions = InstallerConfig().distributions
        for name, dist_data in overrides.items():
            if name not in distributions:
                raise ValueError(f"Unknown distribution: {name}")
            merged = asdict(distributions[name])
            merged.update(dist_data or {})
            distributions[name] = DistributionConfig(**merged)
        return distributions

    def get_config(self) -> InstallerConfig:
        if self._config is None:
            return self.load_config()
        return self._config

    def get_distribution(self, distribution: Distribution) -> DistributionConfig:
        config = self.get_config()
        dist = config.distributions.get(distribution.value)
        if not dist:
            raise ValueError(f"Unknown distribution: {distribution.value}")
        return dist
