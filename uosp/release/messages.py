"""Changelog release messages.

Each variant carries exactly what its template needs; `render` is the
only place the literal changelog text is produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from uosp.release.branch import release_label

PackageKind = Literal["openstack", "regular"]


@dataclass(frozen=True, slots=True)
class UpstreamRelease:
    label: str


@dataclass(frozen=True, slots=True)
class UpstreamReleaseWithBug:
    label: str
    bug_id: str


@dataclass(frozen=True, slots=True)
class SnapshotRelease:
    label: str


@dataclass(frozen=True, slots=True)
class GenericRelease:
    version: str


@dataclass(frozen=True, slots=True)
class GenericReleaseWithBug:
    version: str
    bug_id: str


ReleaseMessage = (
    UpstreamRelease
    | UpstreamReleaseWithBug
    | SnapshotRelease
    | GenericRelease
    | GenericReleaseWithBug
)


def render(message: ReleaseMessage) -> str:
    match message:
        case UpstreamRelease(label=label):
            return f"New upstream release for OpenStack {label}."
        case UpstreamReleaseWithBug(label=label, bug_id=bug):
            return f"New upstream release for OpenStack {label}. (LP# {bug})."
        case SnapshotRelease(label=label):
            return f"New upstream snapshot for OpenStack {label}."
        case GenericRelease(version=version):
            return f"New upstream release {version}."
        case GenericReleaseWithBug(version=version, bug_id=bug):
            return f"New upstream release {version}. (LP# {bug})."


def rebase_message(
    *,
    kind: str,
    release: str,
    version: str,
    bug_id: str | None,
    master_release: str,
) -> ReleaseMessage:
    """Message recorded when rebasing onto a new upstream release."""
    if kind == "openstack":
        label = release_label(release, master_release)
        if bug_id:
            return UpstreamReleaseWithBug(label=label, bug_id=bug_id)
        return UpstreamRelease(label=label)
    if bug_id:
        return GenericReleaseWithBug(version=version, bug_id=bug_id)
    return GenericRelease(version=version)


def snapshot_message(*, release: str, master_release: str) -> ReleaseMessage:
    return SnapshotRelease(label=release_label(release, master_release))
