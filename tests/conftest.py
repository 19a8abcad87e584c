#!/usr/bin/env python3

"""
Pytest configuration and shared fixtures for docker-setup test suite.
"""

import io
import os
import sys
import shutil
import tempfile
import subprocess
import pytest
import yaml
from pathlib import Path
from unittest.mock import Mock, patch

# Add the project root to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docker_setup.config.manager import ConfigManager
from docker_setup.console.reporter import Reporter


class TtyInput(io.StringIO):
    """In-memory stdin that claims to be a terminal"""

    def isatty(self):
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        return True


class FakeCommands:
    """Stands in for subprocess.run and shutil.which.

    Commands whose joined argv contains a fragment in ``failures`` exit 1.
    ``outputs`` maps fragments to stdout.
    """

    def __init__(self):
        self.calls = []
        self.inputs = []
        self.failures = set()
        self.missing = set()
        self.outputs = {
            "docker --version": "Docker version 27.3.1, build ce12230",
            "docker compose version": "Docker Compose version v2.29.7",
            "dpkg --print-architecture": "amd64",
            "lsb_release -cs": "bookworm",
        }

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.inputs.append(kwargs.get("input"))
        joined = " ".join(cmd)
        returncode = 1 if any(fragment in joined for fragment in self.failures) else 0
        stdout = ""
        for fragment, value in self.outputs.items():
            if fragment in joined:
                stdout = value
                break
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")

    def which(self, name):
        if name in self.missing:
            return None
        return f"/usr/bin/{name}"

    def joined_calls(self):
        return [" ".join(call) for call in self.calls]

    def ran(self, fragment):
        return any(fragment in call for call in self.joined_calls())

    def index_of(self, fragment):
        for index, call in enumerate(self.joined_calls()):
            if fragment in call:
                return index
        raise AssertionError(f"No command containing {fragment!r} was run")


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that gets cleaned up after test"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir

    # Cleanup
    if os.path.exists(temp_dir):
        shutil.rmtree(temp_dir)


@pytest.fixture
def os_release_file(temp_dir):
    path = os.path.join(temp_dir, "os-release")
    with open(path, "w") as f:
        f.write('PRETTY_NAME="Ubuntu 24.04.1 LTS"\n')
        f.write('NAME="Ubuntu"\n')
        f.write('VERSION_ID="24.04"\n')
        f.write('VERSION_CODENAME=noble\n')
        f.write('ID=ubuntu\n')
        f.write('ID_LIKE=debian\n')
        f.write('UBUNTU_CODENAME=noble\n')
    return path


@pytest.fixture
def config_file(temp_dir, os_release_file):
    """Write a config file that keeps every system path inside temp_dir"""
    path = os.path.join(temp_dir, "config.yaml")
    data = {
        "keyring_path": os.path.join(temp_dir, "keyrings", "docker-archive-keyring.gpg"),
        "source_list_path": os.path.join(temp_dir, "sources.list.d", "docker.list"),
        "os_release_path": os_release_file,
    }
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return path


@pytest.fixture
def config_manager(config_file):
    manager = ConfigManager(config_file)
    manager.load_config()
    return manager


@pytest.fixture
def reporter():
    return Reporter()


@pytest.fixture
def tty_input():
    """Factory for interactive stdin replacements"""
    def make(text=""):
        return TtyInput(text)
    return make


@pytest.fixture
def fake_commands():
    """Patch subprocess.run and shutil.which with a scripted fake"""
    fake = FakeCommands()
    with patch("docker_setup.system.runner.subprocess.run", side_effect=fake), \
         patch("docker_setup.system.runner.shutil.which", side_effect=fake.which):
        yield fake


@pytest.fixture
def mock_key_download():
    response = Mock()
    response.content = b"-----BEGIN PGP PUBLIC KEY BLOCK-----\n...\n-----END PGP PUBLIC KEY BLOCK-----\n"
    response.raise_for_status.return_value = None
    with patch("docker_setup.repository.keys.requests.get", return_value=response) as mock_get:
        yield mock_get


@pytest.fixture
def mock_docker_client():
    client = Mock()
    client.ping.return_value = True
    with patch("docker_setup.installers.engines.docker.from_env", return_value=client) as mock_from_env:
        yield mock_from_env


@pytest.fixture(autouse=True)
def root_user():
    """Tests run as if root unless they patch geteuid themselves"""
    with patch("os.geteuid", return_value=0):
        yield


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names"""
    for item in items:
        # Add integration marker to integration test classes
        if "Integration" in item.cls.__name__ if item.cls else False:
            item.add_marker(pytest.mark.integration)
