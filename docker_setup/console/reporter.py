#!/usr/bin/env python3

import logging
from typing import Optional
from rich.console import Console

logger = logging.getLogger(__name__)

class Reporter:
    """User-facing output, mirrored into the log file.

    Program text is printed with markup and highlighting disabled so that
    repository lines and package names containing brackets print verbatim.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console(highlight=False, emoji=False, soft_wrap=True)
        self.error_console = error_console or Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

    def header(self, title: str):
        self.console.print(title, style="bold", markup=False)
        self.console.print("-" * len(title), markup=False)

    def info(self, message: str):
        logger.info(message)
        self.console.print(message, markup=False)

    def success(self, message: str):
        logger.info(message)
        self.console.print(message, style="bold green", markup=False)

    def warn(self, message: str):
        logger.warning(message)
        self.console.print(f"WARNING: {message}", style="yellow", markup=False)

    def error(self, message: str):
        logger.error(message)
        self.error_console.print(f"ERROR: {message}", style="bold red", markup=False)

    def echo(self, text: str):
        """Print command output without logging it"""
        self.console.print(text, markup=False)

    def prompt(self, text: str):
        self.console.print(text, end="", markup=False)
