"""debian/changelog access.

Reading and appending entries is delegated to `dpkg-parsechangelog` and
`debchange`; this module decides which version and text to append.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from uosp.core.result import Err, Ok, Result
from uosp.output.console import ConsoleProtocol
from uosp.platform.process import run as run_process
from uosp.platform.process import run_streaming
from uosp.release.errors import ReleaseError, from_process
from uosp.release.messages import ReleaseMessage, render
from uosp.release.version import (
    DEFAULT_REVISION_SUFFIX,
    Version,
    next_release_version,
    parse_version,
)

__all__ = ["ChangelogProtocol", "DebianChangelog", "record_release"]


class ChangelogProtocol(Protocol):
    """What workflows need from a package changelog."""

    def head_version(self) -> Version | None:
        """Most recent recorded version, None when it cannot be read."""
        ...

    def append_entry(self, version: str, text: str) -> Result[None, ReleaseError]:
        """Add a new head entry stamped with `version`."""
        ...


class DebianChangelog:
    """Changelog of the package checked out in `workdir`."""

    def __init__(self, workdir: Path, console: ConsoleProtocol) -> None:
        self.workdir = workdir
        self._console = console

    def head_version(self) -> Version | None:
        result = run_process(["dpkg-parsechangelog", "-S", "version"], cwd=self.workdir)
        if isinstance(result, Err):
            return None
        parsed = parse_version(result.value)
        if isinstance(parsed, Err):
            return None
        return parsed.value

    def append_entry(self, version: str, text: str) -> Result[None, ReleaseError]:
        cmd = ["debchange", "--newversion", version, text]
        self._console.command(cmd)
        result = run_streaming(cmd, cwd=self.workdir)
        if isinstance(result, Err):
            return Err(
                from_process("changelog", f"unable to add changelog entry {version}", result.error)
            )
        return Ok(None)



def record_release(
    changelog: ChangelogProtocol,
    target_upstream: str,
    message: ReleaseMessage,
    *,
    revision: str = DEFAULT_REVISION_SUFFIX,
) -> Result[str, ReleaseError]:
    """Append a release entry for `target_upstream`.

    The epoch of the current head is carried over. Returns the full
    version that was recorded.
    """
    version = next_release_version(changelog.head_version(), target_upstream, revision)
    appended = changelog.append_entry(version, render(message))
    if isinstance(appended, Err):
        return appended
    return Ok(version)
