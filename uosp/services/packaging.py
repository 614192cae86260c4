"""Packaging tool collaborators.

`DebianPackagingTools` drives uscan, gbp, backportpackage and
pkgos-generate-snapshot. Workflows only see `PackagingTools`, so tests
substitute an in-memory fake.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import Protocol

from uosp.core.result import Err, Ok, Result
from uosp.output.console import ConsoleProtocol
from uosp.platform.process import run_streaming
from uosp.release.errors import ErrorKind, ReleaseError, from_process
from uosp.services.package import Package

__all__ = ["DebianPackagingTools", "PackagingTools"]

# Slack for filesystems whose mtime lags the wall clock.
_MTIME_SLACK = 1.0


class PackagingTools(Protocol):
    def download_tarball(self, package: Package, version: str) -> Result[None, ReleaseError]:
        """Fetch the upstream tarball of `version` next to the checkout."""
        ...

    def import_tarball(self, package: Package, archive: Path) -> Result[None, ReleaseError]:
        """Merge `archive` into the packaging tree, replacing upstream sources."""
        ...

    def build(self, package: Package) -> Result[None, ReleaseError]: ...

    def publish(
        self,
        package: Package,
        *,
        ppa: str,
        serie: str,
        suffix: str,
        dsc: str,
    ) -> Result[None, ReleaseError]: ...

    def generate_snapshot(self, mirror_dir: Path) -> Result[None, ReleaseError]:
        """Produce an orig tarball from the upstream checkout in `mirror_dir`."""
        ...

    def collect_snapshot_tarball(self, upstream: str, target: Path) -> Result[Path, ReleaseError]:
        """Move the tarball produced by `generate_snapshot` to `target`.

        Only tarballs written since the last `generate_snapshot` call qualify.
        """
        ...


class DebianPackagingTools:
    def __init__(self, *, console: ConsoleProtocol, tarballs_dir: Path) -> None:
        self._console = console
        self.tarballs_dir = tarballs_dir
        self._snapshot_started: float | None = None

    def download_tarball(self, package: Package, version: str) -> Result[None, ReleaseError]:
        return self._stream(
            ["uscan", "--download-version", version, "--rename"],
            cwd=package.work_dir,
            kind="version",
            message=f"unable to download tarball {version}",
        )

    def import_tarball(self, package: Package, archive: Path) -> Result[None, ReleaseError]:
        return self._stream(
            ["gbp", "import-orig", "--no-interactive", "--merge-mode=replace", str(archive)],
            cwd=package.work_dir,
            kind="import",
            message=f"unable to import {archive.name} to {package.name}",
        )

    def build(self, package: Package) -> Result[None, ReleaseError]:
        return self._stream(
            ["gbp", "buildpackage", "-S", "-sa", "-d"],
            cwd=package.work_dir,
            kind="build",
            message=f"unable to build package {package.name}",
        )

    def publish(
        self,
        package: Package,
        *,
        ppa: str,
        serie: str,
        suffix: str,
        dsc: str,
    ) -> Result[None, ReleaseError]:
        return self._stream(
            ["backportpackage", "-S", suffix, "-u", ppa, "-d", serie, "-y", dsc],
            cwd=package.root_dir,
            kind="publish",
            message=f"unable to publish {package.name} to {ppa}",
        )

    def generate_snapshot(self, mirror_dir: Path) -> Result[None, ReleaseError]:
        self._snapshot_started = time.time()
        return self._stream(
            ["pkgos-generate-snapshot"],
            cwd=mirror_dir,
            kind="snapshot",
            message=f"unable to generate snapshot of {mirror_dir.name}",
        )

    def collect_snapshot_tarball(self, upstream: str, target: Path) -> Result[Path, ReleaseError]:
        pattern = f"{upstream}_*.orig.tar.gz"
        candidates = sorted(self.tarballs_dir.glob(pattern), key=lambda p: p.stat().st_mtime)
        if self._snapshot_started is not None:
            # Leftovers of earlier runs must not pass for the new snapshot.
            started = self._snapshot_started - _MTIME_SLACK
            candidates = [p for p in candidates if p.stat().st_mtime >= started]
        if not candidates:
            return Err(
                ReleaseError(
                    kind="snapshot",
                    message=f"no snapshot tarball for {upstream}",
                    hint=str(self.tarballs_dir / pattern),
                )
            )

        source = candidates[-1]
        self._console.command(["mv", str(source), str(target)])
        try:
            shutil.move(str(source), str(target))
        except OSError as e:
            return Err(ReleaseError(kind="fatal", message=f"unexpected error {e}", hint=str(source)))
        return Ok(target)

    def _stream(
        self,
        cmd: list[str],
        *,
        cwd: Path,
        kind: ErrorKind,
        message: str,
    ) -> Result[None, ReleaseError]:
        self._console.command(cmd)
        result = run_streaming(cmd, cwd=cwd)
        if isinstance(result, Err):
            return Err(from_process(kind, message, result.error))
        return Ok(None)
