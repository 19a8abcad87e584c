#!/usr/bin/env python3

"""
Docker Installation Tool

Installs the Docker engine, CLI, containerd and the Compose plugin on
Debian, Ubuntu Server and Rocky Linux hosts using the distribution's
native package manager and Docker's official repositories.
"""

__version__ = "1.0.0"
__author__ = "Docker Setup Project"
