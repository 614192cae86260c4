"""On-disk layout of a package under a root directory.

    <root>/build-area/                      build artifacts
    <root>/<name>/                          packaging checkout
    <root>/<name>_<version>.orig.tar.gz     upstream tarballs
    <root>/t/<upstream>/                    upstream mirrors for snapshots
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from uosp.core.result import Err, Ok, Result
from uosp.release.errors import ReleaseError

BUILD_AREA = "build-area"
MIRRORS_DIR = "t"


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    root_dir: Path

    @property
    def work_dir(self) -> Path:
        return self.root_dir / self.name

    @property
    def build_dir(self) -> Path:
        return self.root_dir / BUILD_AREA

    def mirror_dir(self, upstream: str) -> Path:
        return self.root_dir / MIRRORS_DIR / upstream

    def orig_tarball(self, version: str, upstream: str | None = None) -> Path:
        """Upstream tarball of `version`, named after `upstream` when given."""
        return self.root_dir / f"{upstream or self.name}_{version}.orig.tar.gz"

    def dsc_path(self, version: str) -> str:
        """Source control file produced by a build, relative to root."""
        return f"{BUILD_AREA}/{self.name}_{version}.dsc"


def create_package(name: str, root_dir: Path) -> Result[Package, ReleaseError]:
    """Describe `name` under `root_dir`, creating the build area if needed."""
    if not name or "/" in name:
        return Err(ReleaseError(kind="fatal", message=f"invalid package name: {name!r}"))

    package = Package(name=name, root_dir=root_dir)
    try:
        package.build_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="fatal",
                message=f"unexpected error {e}",
                hint=str(package.build_dir),
            )
        )
    return Ok(package)
