"""Where package and upstream repositories are cloned from."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamMirror:
    """OpenStack upstream project mirrored on GitHub."""

    name: str


@dataclass(frozen=True, slots=True)
class DistroDev:
    """Ubuntu Server Dev packaging repository on Launchpad."""

    name: str


@dataclass(frozen=True, slots=True)
class GenericHub:
    """Any GitHub repository, `name` is `owner/project`."""

    name: str


@dataclass(frozen=True, slots=True)
class GenericForge:
    """Debian Salsa repository, `name` is `group/project`."""

    name: str


@dataclass(frozen=True, slots=True)
class LiteralUrl:
    url: str


@dataclass(frozen=True, slots=True)
class VcsNative:
    """Let `gbp clone vcsgit:` find the repository from the archive's Vcs-Git field."""

    name: str


GitSource = UpstreamMirror | DistroDev | GenericHub | GenericForge | LiteralUrl
CloneSource = GitSource | VcsNative


def clone_url(source: GitSource) -> str:
    """URL handed to `git clone`."""
    match source:
        case UpstreamMirror(name=name):
            return f"https://github.com/openstack/{name}.git"
        case DistroDev(name=name):
            return f"https://git.launchpad.net/~ubuntu-server-dev/ubuntu/+source/{name}"
        case GenericHub(name=name):
            return f"https://github.com/{name}.git"
        case GenericForge(name=name):
            return f"https://salsa.debian.org/{name}.git"
        case LiteralUrl(url=url):
            return url


def source_for_dist(name: str, dist: str) -> CloneSource:
    """Packaging repository of `name` for a target distribution."""
    if dist == "ubuntu":
        return DistroDev(name)
    return VcsNative(name)
