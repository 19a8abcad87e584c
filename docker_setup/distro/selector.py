#!/usr/bin/env python3

import sys
import logging
from typing import Dict, Optional, TextIO

from ..config.manager import ConfigManager
from ..console.reporter import Reporter
from ..exceptions import SelectionError
from .models import Distribution

logger = logging.getLogger(__name__)

MENU_CHOICES: Dict[str, Distribution] = {
    "1": Distribution.DEBIAN,
    "2": Distribution.UBUNTU,
    "3": Distribution.ROCKY,
}

class DistributionSelector:
    def __init__(self, config_manager: ConfigManager, reporter: Reporter, stdin: Optional[TextIO] = None):
        self.config_manager = config_manager
        self.config = config_manager.get_config()
        self.reporter = reporter
        self.stdin = stdin

    @property
    def max_attempts(self) -> int:
        return self.config.max_attempts

    def _input_stream(self) -> TextIO:
        return self.stdin if self.stdin is not None else sys.stdin

    def _is_interactive(self, stream: Optional[TextIO]) -> bool:
        if stream is None:
            return False
        try:
            return stream.isatty()
        except (AttributeError, ValueError):
            # Closed or detached streams
            return False

    def show_menu(self):
        self.reporter.echo("Please select your Linux distribution:")
        for number, distribution in MENU_CHOICES.items():
            label = self.config.distributions[distribution.value].display_name
            self.reporter.echo(f"{number}) {label}")
        self.reporter.prompt(f"Enter the number of your choice (1-{len(MENU_CHOICES)}): ")

    def parse_choice(self, raw: str) -> Optional[Distribution]:
        return MENU_CHOICES.get(raw.strip())

    def select(self) -> Distribution:
        """Prompt until a valid choice is made or the attempts run out"""
        stream = self._input_stream()
        if not self._is_interactive(stream):
            raise SelectionError(
                "This script requires interactive input to select a distribution. "
                "Please download the script and run it manually with 'sudo docker-setup'."
            )

        attempts = 0
        while attempts < self.max_attempts:
            self.show_menu()
            line = stream.readline()
            if not line:
                # EOF leaves the prompt line open
                self.reporter.echo("")

            distribution = self.parse_choice(line)
            if distribution is not None:
                logger.info(f"Selected distribution: {distribution.value}")
                return distribution

            attempts += 1
            self.reporter.echo(f"Invalid choice. Please select a number between 1 and {len(MENU_CHOICES)}.")
            logger.warning(f"Invalid distribution choice {line.strip()!r} (attempt {attempts}/{self.max_attempts})")

        raise SelectionError("Too many invalid attempts. Exiting.")
