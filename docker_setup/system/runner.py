#!/usr/bin/env python3

import shutil
import logging
import subprocess
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

class CommandRunner:
    """Runs external commands as argument vectors and reports their exit status.

    Commands are never passed through a shell. Callers check the returned
    exit status at the call site and decide whether a failure is fatal.
    """

    def __init__(self, use_sudo: bool = False):
        self.use_sudo = use_sudo

    def build_command(self, command: List[str], elevate: bool = False) -> List[str]:
        if elevate and self.use_sudo:
            return ["sudo"] + list(command)
        return list(command)

    def run(self, command: List[str], elevate: bool = False, capture: bool = False,
            input_data: Optional[Union[str, bytes]] = None) -> subprocess.CompletedProcess:
        cmd = self.build_command(command, elevate)
        logger.info(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                input=input_data,
                capture_output=capture,
                text=not isinstance(input_data, bytes),
                check=False
            )
        except FileNotFoundError as e:
            logger.error(f"Command not found: {cmd[0]}")
            return subprocess.CompletedProcess(cmd, 127, stdout="", stderr=str(e))

        if result.returncode != 0:
            logger.error(f"Command failed with exit code {result.returncode}: {' '.join(cmd)}")
            if capture and result.stderr:
                logger.debug(f"stderr: {result.stderr}")

        return result

    def succeeds(self, command: List[str], elevate: bool = False) -> bool:
        return self.run(command, elevate=elevate).returncode == 0

    def output(self, command: List[str], elevate: bool = False) -> Optional[str]:
        """Return stripped stdout, or None when the command fails"""
        result = self.run(command, elevate=elevate, capture=True)
        if result.returncode != 0:
            return None
        stdout = result.stdout
        if isinstance(stdout, bytes):
            stdout = stdout.decode('utf-8', errors='replace')
        return (stdout or "").strip()

    @staticmethod
    def command_exists(name: str) -> bool:
        return shutil.which(name) is not None
