"""Choices shared by several commands."""

from __future__ import annotations

from enum import StrEnum


class Kind(StrEnum):
    openstack = "openstack"
    regular = "regular"


class Dist(StrEnum):
    ubuntu = "ubuntu"
    debian = "debian"
