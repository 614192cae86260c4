"""Git repository gateway.

`GitRepository` wraps the version-control operations the packaging
workflows need against one working tree. Every method returns a Result
whose error kind names the operation that failed.

Usage:
    repo = GitRepository(root / "nova", console)
    match repo.clone(DistroDev("nova")):
        case Ok(_):
            repo.checkout("stable/stein")
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from uosp.core.result import Err, Ok, Result
from uosp.git.urls import CloneSource, VcsNative, clone_url
from uosp.output.console import ConsoleProtocol
from uosp.platform.http import HttpClient, RealHttpClient
from uosp.platform.process import run as run_process
from uosp.platform.process import run_streaming
from uosp.release.errors import ErrorKind, ReleaseError, from_process

__all__ = ["GitRepository", "RepositoryGateway"]


class RepositoryGateway(Protocol):
    """Version-control capabilities used by workflows."""

    path: Path

    def exists(self) -> bool: ...

    def clone(self, source: CloneSource) -> Result[None, ReleaseError]:
        """Clone into `path` unless it already exists."""
        ...

    def checkout(self, branch: str) -> Result[None, ReleaseError]: ...

    def pull(self) -> Result[None, ReleaseError]: ...

    def commit_from_changelog(self) -> Result[None, ReleaseError]:
        """Commit all changes using the new changelog entry as message."""
        ...

    def show(self) -> Result[None, ReleaseError]: ...

    def push_all(self, url: str) -> Result[None, ReleaseError]:
        """Force push every branch to `url`."""
        ...

    def apply_patch(self, patch: Path) -> Result[None, ReleaseError]: ...

    def apply_patch_url(self, url: str) -> Result[None, ReleaseError]:
        """Fetch a patch over HTTP(S) and apply it."""
        ...

    def short_hash(self) -> Result[str, ReleaseError]: ...


class GitRepository:
    """Repository checked out at `path` (`<root>/<name>`)."""

    def __init__(
        self, path: Path, console: ConsoleProtocol, *, http: HttpClient | None = None
    ) -> None:
        self.path = path
        self._console = console
        self._http = http or RealHttpClient()

    def exists(self) -> bool:
        return self.path.exists()

    def clone(self, source: CloneSource) -> Result[None, ReleaseError]:
        if self.exists():
            return Ok(None)

        root = self.path.parent
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(ReleaseError(kind="fatal", message=f"unexpected error {e}", hint=str(root)))

        match source:
            case VcsNative(name=name):
                cmd = ["gbp", "clone", f"vcsgit:{name}", self.path.name]
            case _:
                cmd = ["git", "clone", clone_url(source), self.path.name]
        return self._stream(
            cmd, cwd=root, kind="clone", message=f"unable to git clone project {self.path.name}"
        )

    def checkout(self, branch: str) -> Result[None, ReleaseError]:
        return self._stream(
            ["git", "checkout", branch],
            kind="checkout",
            message=f"unable to checkout branch {branch}",
        )

    def pull(self) -> Result[None, ReleaseError]:
        return self._stream(["git", "pull"], kind="pull", message="unable to pull last changes")

    def commit_from_changelog(self) -> Result[None, ReleaseError]:
        return self._stream(
            ["debcommit", "-a"],
            kind="commit",
            message="unable to commit changes based on the changelog",
        )

    def show(self) -> Result[None, ReleaseError]:
        return self._stream(["git", "show"], kind="show", message="unable to show last commit")

    def push_all(self, url: str) -> Result[None, ReleaseError]:
        return self._stream(
            ["git", "push", "-f", "--all", url],
            kind="push",
            message=f"unable to push changes to {url}",
        )

    def apply_patch(self, patch: Path) -> Result[None, ReleaseError]:
        return self._stream(
            ["git", "apply", str(patch)],
            kind="apply",
            message=f"unable to apply patch {patch}",
        )

    def apply_patch_url(self, url: str) -> Result[None, ReleaseError]:
        fetched = self._http.get_text(url)
        if isinstance(fetched, Err):
            return Err(
                ReleaseError(
                    kind="apply", message=f"unable to fetch patch {url}", hint=str(fetched.error)
                )
            )

        cmd = ["git", "apply"]
        self._console.command([*cmd, f"< {url}"])
        result = run_process(cmd, cwd=self.path, input_text=fetched.value)
        if isinstance(result, Err):
            return Err(from_process("apply", f"unable to apply patch {url}", result.error))
        return Ok(None)

    def short_hash(self) -> Result[str, ReleaseError]:
        result = run_process(["git", "rev-parse", "--short", "HEAD"], cwd=self.path)
        if isinstance(result, Err):
            return Err(
                from_process(
                    "hash", "unable to generate hash based on last commit", result.error
                )
            )
        githash = result.value.strip()
        if not githash:
            return Err(
                ReleaseError(kind="hash", message="unable to generate hash based on last commit")
            )
        return Ok(githash)

    def _stream(
        self,
        cmd: list[str],
        *,
        kind: ErrorKind,
        message: str,
        cwd: Path | None = None,
    ) -> Result[None, ReleaseError]:
        self._console.command(cmd)
        result = run_streaming(cmd, cwd=cwd or self.path)
        if isinstance(result, Err):
            return Err(from_process(kind, message, result.error))
        return Ok(None)
