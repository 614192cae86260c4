"""Ubuntu OpenStack Package: release tooling for git-tracked Debian packages."""

__version__ = "0.4.0"
