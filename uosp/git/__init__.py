"""Git operations: clone sources and the repository gateway."""

from uosp.git.repository import GitRepository, RepositoryGateway
from uosp.git.urls import (
    CloneSource,
    DistroDev,
    GenericForge,
    GenericHub,
    GitSource,
    LiteralUrl,
    UpstreamMirror,
    VcsNative,
    clone_url,
    source_for_dist,
)

__all__ = [
    # Repository
    "GitRepository",
    "RepositoryGateway",
    # Sources
    "CloneSource",
    "DistroDev",
    "GenericForge",
    "GenericHub",
    "GitSource",
    "LiteralUrl",
    "UpstreamMirror",
    "VcsNative",
    "clone_url",
    "source_for_dist",
]
