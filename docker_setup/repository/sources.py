#!/usr/bin/env python3

import os
import re
import logging
from dataclasses import dataclass
from typing import Dict

from ..console.reporter import Reporter
from ..exceptions import RepositoryError
from ..system.runner import CommandRunner

logger = logging.getLogger(__name__)

ARCHITECTURE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")
CODENAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
CHANNEL_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
URL_PATTERN = re.compile(r"^https?://[^\s\[\]]+$")
KEYRING_PATTERN = re.compile(r"^/[^\s\[\]]+$")

def read_os_release(path: str = "/etc/os-release") -> Dict[str, str]:
    """Parse an os-release file into a dict, unquoting values"""
    info = {}
    try:
        with open(path, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                key, value = line.split('=', 1)
                info[key.strip()] = value.strip().strip('"').strip("'")
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
    return info

def detect_codename(runner: CommandRunner, reporter: Reporter, os_release_key: str,
                    os_release_path: str = "/etc/os-release") -> str:
    if runner.command_exists("lsb_release"):
        codename = runner.output(["lsb_release", "-cs"])
        if codename:
            return codename
        logger.warning("lsb_release did not report a codename, falling back to os-release")
    else:
        reporter.warn("lsb_release not found. Attempting to determine codename manually.")

    codename = read_os_release(os_release_path).get(os_release_key)
    if not codename:
        raise RepositoryError(f"Could not determine the release codename ({os_release_key} in {os_release_path}).")
    return codename

def detect_architecture(runner: CommandRunner) -> str:
    architecture = runner.output(["dpkg", "--print-architecture"])
    if not architecture:
        raise RepositoryError("Could not determine the package architecture with dpkg.")
    return architecture

@dataclass
class AptSource:
    architecture: str
    keyring_path: str
    url: str
    codename: str
    channel: str = "stable"

    def validate(self) -> None:
        checks = [
            ("architecture", self.architecture, ARCHITECTURE_PATTERN),
            ("keyring path", self.keyring_path, KEYRING_PATTERN),
            ("repository URL", self.url, URL_PATTERN),
            ("codename", self.codename, CODENAME_PATTERN),
            ("channel", self.channel, CHANNEL_PATTERN),
        ]
        for label, value, pattern in checks:
            if not value or not pattern.fullmatch(value):
                raise RepositoryError(f"Refusing to write repository definition: invalid {label} {value!r}")

    def render(self) -> str:
        self.validate()
        return (f"deb [arch={self.architecture} signed-by={self.keyring_path}] "
                f"{self.url} {self.codename} {self.channel}")

def write_source_list(source: AptSource, path: str) -> str:
    """Write the single-line source list, replacing any previous file"""
    line = source.render()
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        with open(path, 'w') as f:
            f.write(line + "\n")
    except OSError as e:
        raise RepositoryError(f"Failed to add Docker repository: {e}") from e

    logger.info(f"Wrote repository definition to {path}: {line}")
    return line
