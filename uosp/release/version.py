"""Debian-style package versions: `[epoch:]upstream[-revision]`."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from uosp.core.result import Err, Ok, Result
from uosp.release.errors import ReleaseError

DEFAULT_REVISION_SUFFIX = "0ubuntu1"

_EPOCH_RE = re.compile(r"[0-9]+")
_UBUNTU_REVISION_RE = re.compile(r"^([0-9]+)ubuntu([0-9]+)$")

_SNAPSHOT_TIMESTAMP_FORMAT = "%Y%m%d%H"
_PPA_TIMESTAMP_FORMAT = "%Y%m%d%H%M"


@dataclass(frozen=True, slots=True)
class Version:
    upstream: str
    revision: str | None = None
    epoch: int | None = None

    def __str__(self) -> str:
        out = self.upstream
        if self.epoch is not None:
            out = f"{self.epoch}:{out}"
        if self.revision is not None:
            out = f"{out}-{self.revision}"
        return out

    @property
    def without_epoch(self) -> str:
        """Version as it appears in source package file names."""
        if self.revision is None:
            return self.upstream
        return f"{self.upstream}-{self.revision}"


def parse_version(raw: str, *, require_revision: bool = False) -> Result[Version, ReleaseError]:
    """Parse a version string read from a changelog head.

    Only the first `:` is significant, and only when its prefix is an
    unsigned integer; otherwise the whole string is upstream+revision.
    The remainder is split on the first `-`.
    """
    value = raw.strip()

    head, sep, rest = value.partition(":")
    if sep and _EPOCH_RE.fullmatch(head):
        epoch: int | None = int(head)
        body = rest
    else:
        epoch = None
        body = value

    upstream, dash, revision = body.partition("-")
    if not upstream:
        return Err(ReleaseError(kind="version", message=f"unable to parse version: {raw!r}"))
    if dash and not revision:
        return Err(
            ReleaseError(kind="version", message=f"empty packaging revision in {raw!r}")
        )
    if not dash and require_revision:
        return Err(
            ReleaseError(kind="version", message=f"missing packaging revision in {raw!r}")
        )

    return Ok(Version(upstream=upstream, revision=revision if dash else None, epoch=epoch))


def format_release(
    epoch: int | None,
    target_upstream: str,
    revision: str = DEFAULT_REVISION_SUFFIX,
) -> str:
    """Full version of the first packaging revision of `target_upstream`."""
    return str(Version(upstream=target_upstream, revision=revision, epoch=epoch))


def format_snapshot(target_upstream: str, timestamp: str, githash: str) -> str:
    """Upstream version of a snapshot, e.g. `19.0.1~git2019061715.86823b5c`."""
    return f"{target_upstream}~git{timestamp}.{githash}"


def snapshot_timestamp(now: datetime) -> str:
    """Hour-resolution UTC stamp embedded in snapshot versions."""
    return now.strftime(_SNAPSHOT_TIMESTAMP_FORMAT)


def ppa_suffix(now: datetime) -> str:
    """Version suffix appended when backporting to a PPA."""
    return f"~ppa{now.strftime(_PPA_TIMESTAMP_FORMAT)}"


def next_release_version(
    head: Version | None,
    target_upstream: str,
    revision: str = DEFAULT_REVISION_SUFFIX,
) -> str:
    """Version to record in the changelog for `target_upstream`.

    A new upstream version starts at `revision`. When the head already
    packages `target_upstream` with an `NubuntuM` revision, M is bumped
    instead so the new entry still sorts above the head.
    """
    epoch = head.epoch if head is not None else None
    if head is not None and head.upstream == target_upstream and head.revision:
        m = _UBUNTU_REVISION_RE.match(head.revision)
        if m is not None:
            bumped = f"{m.group(1)}ubuntu{int(m.group(2)) + 1}"
            return format_release(epoch, target_upstream, bumped)
    return format_release(epoch, target_upstream, revision)
