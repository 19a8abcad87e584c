#!/usr/bin/env python3

from enum import Enum


class PackageFamily(Enum):
    APT = "apt"
    DNF = "dnf"


class Distribution(Enum):
    """Supported target distributions"""
    DEBIAN = "debian"
    UBUNTU = "ubuntu"
    ROCKY = "rocky"

    @property
    def family(self) -> PackageFamily:
        if self is Distribution.ROCKY:
            return PackageFamily.DNF
        return PackageFamily.APT
