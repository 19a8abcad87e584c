#!/usr/bin/env python3

"""
Installation exceptions

Every fatal condition raises a subclass of InstallationError at the point of
failure. The CLI entry point reports the message and exits with status 1.
"""


class InstallationError(Exception):
    """Base exception for fatal installation failures"""


class PrivilegeError(InstallationError):
    """The process lacks the privileges required for an operation"""


class SelectionError(InstallationError):
    """No valid distribution could be selected"""


class DependencyError(InstallationError):
    """A required tool is missing and could not be installed"""


class RepositoryError(InstallationError):
    """The vendor signing key or repository could not be registered"""
