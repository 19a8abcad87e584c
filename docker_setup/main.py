#!/usr/bin/env python3

import os
import sys
import argparse
import logging
from typing import List, Optional

from . import __version__
from .config.manager import ConfigManager
from .console.reporter import Reporter
from .distro.selector import DistributionSelector
from .exceptions import InstallationError
from .installers.engines import get_installer
from .system.bootstrap import DependencyBootstrapper
from .system.runner import CommandRunner

def setup_logging(level: str = "INFO"):
    """Configure logging for the application"""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Determine log file path
    if os.geteuid() == 0:
        log_file = "/var/log/docker-setup.log"
    else:
        log_file = os.path.expanduser("~/.local/log/docker-setup.log")
        # Ensure the log directory exists
        os.makedirs(os.path.dirname(log_file), exist_ok=True)

    # Console output goes through the Reporter; the log file keeps the full trail
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file)
        ]
    )

def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    parser = argparse.ArgumentParser(
        description="Docker Installation Script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported distributions: Debian, Ubuntu Server, Rocky Linux

Examples:
  sudo %(prog)s                               # Interactive installation
  sudo %(prog)s --user alice                  # Add 'alice' to the docker group
  sudo %(prog)s --config /etc/docker-setup.yaml --log-level DEBUG
        """
    )

    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
        default=None
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level"
    )

    parser.add_argument(
        "--user", "-u",
        help="Account to add to the docker group (defaults to the invoking user)",
        default=None
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser

def resolve_target_user(explicit: Optional[str] = None) -> Optional[str]:
    """The account that should run docker without sudo"""
    return explicit or os.environ.get("SUDO_USER") or os.environ.get("USER")

def check_privileges(reporter: Reporter) -> bool:
    if os.geteuid() == 0:
        return True

    reporter.echo("This script needs to be run with root privileges to install dependencies and Docker.")
    reporter.echo("Please run it with 'sudo' or as root.")
    return False

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    reporter = Reporter()

    # Nothing else may happen before the privilege check
    if not check_privileges(reporter):
        return 1

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    reporter.header("Docker Installation Script")

    try:
        config_manager = ConfigManager(args.config)
        config = config_manager.get_config()
        runner = CommandRunner(use_sudo=config.use_sudo)

        # Select distribution first to determine package manager for dependency installation
        distribution = DistributionSelector(config_manager, reporter).select()

        DependencyBootstrapper(config_manager, runner, reporter).bootstrap(distribution)

        installer = get_installer(
            distribution,
            config_manager,
            runner,
            reporter,
            user=resolve_target_user(args.user)
        )
        installer.install()
        return 0

    except InstallationError as e:
        reporter.error(str(e))
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        reporter.error(str(e))
        if args.log_level == "DEBUG":
            import traceback
            traceback.print_exc()
        return 1

if __name__ == "__main__":
    sys.exit(main())
