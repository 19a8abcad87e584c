#!/usr/bin/env python3

import os
import logging
import requests
from typing import Optional

from ..exceptions import RepositoryError
from ..system.runner import CommandRunner

logger = logging.getLogger(__name__)

def install_signing_key(runner: CommandRunner, key_url: str, keyring_path: str,
                        timeout: Optional[float] = None) -> None:
    """Download an armored signing key and store it de-armored in a keyring file"""
    logger.info(f"Downloading signing key from {key_url}")
    try:
        response = requests.get(key_url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RepositoryError(f"Failed to add Docker GPG key: {e}") from e

    if not response.content:
        raise RepositoryError(f"Failed to add Docker GPG key: empty response from {key_url}")

    directory = os.path.dirname(keyring_path)
    if directory:
        try:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        except OSError as e:
            raise RepositoryError(f"Failed to add Docker GPG key: {e}") from e

    result = runner.run(
        ["gpg", "--batch", "--yes", "--dearmor", "-o", keyring_path],
        elevate=True,
        capture=True,
        input_data=response.content
    )
    if result.returncode != 0:
        raise RepositoryError("Failed to add Docker GPG key.")

    logger.info(f"Stored signing key in {keyring_path}")
