from __future__ import annotations

MASTER = "master"
DEFAULT_STABLE_PREFIX = "stable"


def format_branch(release: str, stable_prefix: str = DEFAULT_STABLE_PREFIX) -> str:
    """Packaging branch for a release: `master` or `stable/<release>`."""
    if release == MASTER:
        return release
    return f"{stable_prefix}/{release}"


def release_label(release: str, master_release: str) -> str:
    """Human label of a release as written in changelogs (`stein` -> `Stein`)."""
    name = master_release if release == MASTER else release
    return name[:1].upper() + name[1:]
