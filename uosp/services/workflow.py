"""Package release workflows.

Each operation is a fixed sequence of steps run to completion one after
the other. The first failing step aborts the operation and is reported
as `WorkflowFailure(operation, step, error)`; nothing is rolled back, the
working tree stays as the last successful step left it.

Every operation starts the same way: describe the package (creating the
build area), clone its packaging repository if absent, then check out
`pristine-tar`, `upstream` and the target branch.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TypeVar

from uosp.core.config import Config
from uosp.core.result import Err, Ok, Result
from uosp.git.repository import GitRepository, RepositoryGateway
from uosp.git.urls import UpstreamMirror, source_for_dist
from uosp.output.console import ConsoleProtocol
from uosp.platform.http import is_http_url
from uosp.release.branch import MASTER, format_branch
from uosp.release.changelog import ChangelogProtocol, DebianChangelog, record_release
from uosp.release.errors import ReleaseError, WorkflowFailure
from uosp.release.messages import ReleaseMessage, rebase_message, render, snapshot_message
from uosp.release.version import format_snapshot, ppa_suffix, snapshot_timestamp
from uosp.services.package import Package, create_package
from uosp.services.packaging import PackagingTools

__all__ = ["PackageWorkflow", "ReleaseRecord"]

RepositoryFactory = Callable[[Path, ConsoleProtocol], RepositoryGateway]
ChangelogFactory = Callable[[Path, ConsoleProtocol], ChangelogProtocol]
Clock = Callable[[], datetime]

T = TypeVar("T")

# Branches gbp needs locally before working on the packaging branch.
_GBP_BRANCHES = ("pristine-tar", "upstream")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """Changelog entry recorded by rebase or snapshot."""

    package: Package
    version: str
    message: ReleaseMessage

    @property
    def text(self) -> str:
        return render(self.message)


@dataclass(frozen=True, slots=True)
class _Checkout:
    package: Package
    repo: RepositoryGateway


def _at(operation: str, step: str, result: Result[T, ReleaseError]) -> Result[T, WorkflowFailure]:
    return result.map_err(lambda e: WorkflowFailure(operation=operation, step=step, error=e))


class PackageWorkflow:
    """Orchestrates release operations for packages under `root_dir`.

    Collaborators are injected so the sequencing can be exercised without
    git or the Debian tool chain.
    """

    def __init__(
        self,
        *,
        root_dir: Path,
        config: Config,
        console: ConsoleProtocol,
        tools: PackagingTools,
        repository_factory: RepositoryFactory = GitRepository,
        changelog_factory: ChangelogFactory = DebianChangelog,
        clock: Clock = _utcnow,
    ) -> None:
        self.root_dir = root_dir
        self.config = config
        self._console = console
        self._tools = tools
        self._repository_factory = repository_factory
        self._changelog_factory = changelog_factory
        self._clock = clock

    def branch_for(self, release: str) -> str:
        return format_branch(release, self.config.release.stable_branch_prefix)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def clone(self, name: str, *, dist: str = "ubuntu") -> Result[Package, WorkflowFailure]:
        """Clone a package and leave it checked out on master."""
        self._console.header(f"Cloning package '{name}'...")
        checkout = self._checkout("clone", name, branch=MASTER, dist=dist)
        if isinstance(checkout, Err):
            return checkout
        self._console.success("done.")
        return Ok(checkout.value.package)

    def rebase(
        self,
        name: str,
        version: str,
        *,
        release: str = MASTER,
        bug_id: str | None = None,
        kind: str = "openstack",
        dist: str = "ubuntu",
    ) -> Result[ReleaseRecord, WorkflowFailure]:
        """Rebase a package onto a new upstream release."""
        op = "rebase"
        bug = f", #{bug_id}" if bug_id else ""
        self._console.header(
            f"Rebasing {name} {release} to new upstream version '{version}'{bug}..."
        )

        checkout = self._checkout(op, name, branch=self.branch_for(release), dist=dist)
        if isinstance(checkout, Err):
            return checkout
        package, repo = checkout.value.package, checkout.value.repo

        downloaded = _at(op, "download", self._tools.download_tarball(package, version))
        if isinstance(downloaded, Err):
            return downloaded

        archive = package.orig_tarball(version)
        imported = _at(op, "import", self._tools.import_tarball(package, archive))
        if isinstance(imported, Err):
            return imported

        message = rebase_message(
            kind=kind,
            release=release,
            version=version,
            bug_id=bug_id,
            master_release=self.config.release.master_release,
        )
        return self._record_and_commit(op, package, repo, version, message)

    def snapshot(
        self,
        name: str,
        version: str,
        *,
        upstream: str | None = None,
        release: str = MASTER,
        dist: str = "ubuntu",
    ) -> Result[ReleaseRecord, WorkflowFailure]:
        """Package a snapshot of the upstream development branch.

        The upstream project is mirrored under `<root>/t/<upstream>`; its
        short hash and the current hour end up in the snapshot version.
        """
        op = "snapshot"
        upstream_name = upstream or name
        self._console.header(
            f"Updating package {name} {release} to new upstream snapshot '{version}'..."
        )

        checkout = self._checkout(op, name, branch=self.branch_for(MASTER), dist=dist)
        if isinstance(checkout, Err):
            return checkout
        package, repo = checkout.value.package, checkout.value.repo

        mirror = self._repository_factory(package.mirror_dir(upstream_name), self._console)
        for step, action in (
            ("mirror-clone", lambda: mirror.clone(UpstreamMirror(upstream_name))),
            ("mirror-checkout", lambda: mirror.checkout(self.branch_for(release))),
            ("mirror-pull", mirror.pull),
            ("generate-snapshot", lambda: self._tools.generate_snapshot(mirror.path)),
        ):
            done = _at(op, step, action())
            if isinstance(done, Err):
                return done

        githash = _at(op, "hash", mirror.short_hash())
        if isinstance(githash, Err):
            return githash

        snapshot_version = format_snapshot(
            version, snapshot_timestamp(self._clock()), githash.value
        )
        # The same path is used to relocate and to import the tarball.
        archive = package.orig_tarball(snapshot_version, upstream_name)
        relocated = _at(
            op, "relocate", self._tools.collect_snapshot_tarball(upstream_name, archive)
        )
        if isinstance(relocated, Err):
            return relocated

        imported = _at(op, "import", self._tools.import_tarball(package, relocated.value))
        if isinstance(imported, Err):
            return imported

        message = snapshot_message(
            release=release, master_release=self.config.release.master_release
        )
        recorded = self._record_and_commit(op, package, repo, snapshot_version, message)
        if isinstance(recorded, Ok):
            self._console.newline()
            self._console.warning("Please consider to check (build-)deps.")
            self._console.newline()
        return recorded

    def build(self, name: str) -> Result[Package, WorkflowFailure]:
        """Build the source package of an existing checkout."""
        op = "build"
        self._console.header(f"Building {name}...")

        package = _at(op, "package", create_package(name, self.root_dir))
        if isinstance(package, Err):
            return package

        built = _at(op, "build", self._tools.build(package.value))
        if isinstance(built, Err):
            return built
        self._console.success("done.")
        return package

    def publish(
        self,
        name: str,
        ppa: str,
        serie: str,
        *,
        build: bool = False,
        dist: str = "ubuntu",
    ) -> Result[Package, WorkflowFailure]:
        """Backport the current changelog head to a Launchpad PPA."""
        op = "publish"
        self._console.header(f"Backport {name} to '{ppa}', ubuntu {serie}...")

        checkout = self._checkout(op, name, branch=MASTER, dist=dist)
        if isinstance(checkout, Err):
            return checkout
        package = checkout.value.package

        if build:
            built = _at(op, "build", self._tools.build(package))
            if isinstance(built, Err):
                return built

        head = self._changelog_factory(package.work_dir, self._console).head_version()
        if head is None:
            return Err(
                WorkflowFailure(
                    operation=op,
                    step="changelog",
                    error=ReleaseError(
                        kind="changelog",
                        message="unable to read the changelog head version",
                        hint=str(package.work_dir / "debian" / "changelog"),
                    ),
                )
            )

        published = _at(
            op,
            "publish",
            self._tools.publish(
                package,
                ppa=ppa,
                serie=serie,
                suffix=ppa_suffix(self._clock()),
                dsc=package.dsc_path(head.without_epoch),
            ),
        )
        if isinstance(published, Err):
            return published
        self._console.success("done.")
        return Ok(package)

    def pushlp(
        self, name: str, account: str, *, dist: str = "ubuntu"
    ) -> Result[Package, WorkflowFailure]:
        """Force push every branch to the operator's Launchpad repository."""
        op = "pushlp"
        self._console.header(f"Push package '{name}' on lp:{account}...")

        checkout = self._checkout(op, name, branch=MASTER, dist=dist)
        if isinstance(checkout, Err):
            return checkout

        url = self.config.launchpad.format_push_url(account=account, name=name)
        pushed = _at(op, "push", checkout.value.repo.push_all(url))
        if isinstance(pushed, Err):
            return pushed
        self._console.success("done.")
        return Ok(checkout.value.package)

    def patch(
        self,
        name: str,
        source: Path | str,
        *,
        release: str = MASTER,
        dist: str = "ubuntu",
    ) -> Result[Package, WorkflowFailure]:
        """Apply a patch to the packaging tree of `release`.

        `source` is a local patch file or an http(s) URL to fetch it from.
        """
        op = "patch"
        url = source if isinstance(source, str) and is_http_url(source) else None
        label = url or Path(source).name
        self._console.header(f"Applying {label} to {name} {release}...")

        checkout = self._checkout(op, name, branch=self.branch_for(release), dist=dist)
        if isinstance(checkout, Err):
            return checkout

        repo = checkout.value.repo
        if url is not None:
            applied = _at(op, "apply", repo.apply_patch_url(url))
        else:
            applied = _at(op, "apply", repo.apply_patch(Path(source).resolve()))
        if isinstance(applied, Err):
            return applied
        self._console.success("done.")
        return Ok(checkout.value.package)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _checkout(
        self, operation: str, name: str, *, branch: str, dist: str
    ) -> Result[_Checkout, WorkflowFailure]:
        package = _at(operation, "package", create_package(name, self.root_dir))
        if isinstance(package, Err):
            return package

        repo = self._repository_factory(package.value.work_dir, self._console)
        cloned = _at(operation, "clone", repo.clone(source_for_dist(name, dist)))
        if isinstance(cloned, Err):
            return cloned

        for target in (*_GBP_BRANCHES, branch):
            checked_out = _at(operation, "checkout", repo.checkout(target))
            if isinstance(checked_out, Err):
                return checked_out

        return Ok(_Checkout(package=package.value, repo=repo))

    def _record_and_commit(
        self,
        operation: str,
        package: Package,
        repo: RepositoryGateway,
        target_upstream: str,
        message: ReleaseMessage,
    ) -> Result[ReleaseRecord, WorkflowFailure]:
        changelog = self._changelog_factory(package.work_dir, self._console)
        recorded = _at(
            operation,
            "changelog",
            record_release(
                changelog,
                target_upstream,
                message,
                revision=self.config.release.revision_suffix,
            ),
        )
        if isinstance(recorded, Err):
            return recorded

        committed = _at(operation, "commit", repo.commit_from_changelog())
        if isinstance(committed, Err):
            return committed

        shown = _at(operation, "show", repo.show())
        if isinstance(shown, Err):
            return shown

        self._console.success("done.")
        return Ok(ReleaseRecord(package=package, version=recorded.value, message=message))
