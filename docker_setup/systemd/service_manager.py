#!/usr/bin/env python3

import logging

from ..system.runner import CommandRunner

logger = logging.getLogger(__name__)

class ServiceManager:
    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def start_service(self, service_name: str) -> bool:
        """Start a systemd service"""
        if self.runner.succeeds(["systemctl", "start", service_name], elevate=True):
            logger.info(f"Started service: {service_name}")
            return True
        logger.error(f"Failed to start service: {service_name}")
        return False

    def enable_service(self, service_name: str) -> bool:
        """Enable a systemd service on boot"""
        if self.runner.succeeds(["systemctl", "enable", service_name], elevate=True):
            logger.info(f"Enabled service: {service_name}")
            return True
        logger.error(f"Failed to enable service: {service_name}")
        return False
