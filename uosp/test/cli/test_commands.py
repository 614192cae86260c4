from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from uosp import __version__
from uosp.cli.app import app
from uosp.cli.commands import build_cmd, release_cmd, repo_cmd
from uosp.cli.commands.options import Dist, Kind
from uosp.cli.context import CLIContext
from uosp.core.config import Config
from uosp.core.errors import ErrorCode
from uosp.test.fakes import FakeWorld


def _ctx(world: FakeWorld, tmp_path: Path) -> CLIContext:
    return CLIContext(
        root_dir=tmp_path,
        config=Config(),
        console=world.console,
        workflow=world.workflow(tmp_path),
    )


@pytest.fixture
def world(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeWorld:
    fake = FakeWorld(head="2:18.0.0-0ubuntu1")
    for module in (build_cmd, release_cmd, repo_cmd):
        monkeypatch.setattr(module, "build_context", lambda: _ctx(fake, tmp_path))
    return fake


def test_rebase_prints_recorded_entry(world: FakeWorld) -> None:
    release_cmd.rebase(
        project="nova",
        version="19.0.1",
        release="stein",
        bugid="654321",
        kind=Kind.openstack,
        dist=Dist.ubuntu,
    )

    assert world.console.messages[-1] == (
        "2:19.0.1-0ubuntu1: New upstream release for OpenStack Stein. (LP# 654321)."
    )


def test_rebase_failure_exits_non_zero(world: FakeWorld) -> None:
    world.fail_on["download nova 19.0.1"] = "version"

    with pytest.raises(typer.Exit) as exc:
        release_cmd.rebase(
            project="nova",
            version="19.0.1",
            release="stein",
            bugid=None,
            kind=Kind.openstack,
            dist=Dist.ubuntu,
        )

    assert exc.value.exit_code == int(ErrorCode.FAILURE)
    assert world.console.find("rebase failed at download")


def test_snapshot(world: FakeWorld) -> None:
    release_cmd.snapshot(project="nova", version="20.0.0", upstream=None, release="master")

    assert world.commits == 1
    assert world.console.messages[-1].startswith("2:20.0.0~git")


def test_build_failure_exits_non_zero(world: FakeWorld) -> None:
    world.fail_on["build nova"] = "build"

    with pytest.raises(typer.Exit) as exc:
        build_cmd.build(project="nova")

    assert exc.value.exit_code == 1


def test_publish_build_flag(world: FakeWorld) -> None:
    build_cmd.publish(project="nova", ppa="ppa:me/train", serie="eoan", do_build=True)

    assert "build nova" in world.journal


def test_clone_and_pushlp(world: FakeWorld) -> None:
    repo_cmd.clone(project="nova", dist=Dist.debian)
    repo_cmd.pushlp(project="nova", account="me")

    assert world.journal[0] == "clone nova vcsgit:nova"
    assert world.journal[-1] == "push git+ssh://me@git.launchpad.net/~me/ubuntu/+source/nova"


def test_patch(world: FakeWorld, tmp_path: Path) -> None:
    patch = tmp_path / "fix.patch"
    patch.write_text("", encoding="utf-8")

    repo_cmd.patch(project="nova", source=str(patch), release="master")

    assert world.journal[-1] == "apply fix.patch"


def test_patch_from_url(world: FakeWorld) -> None:
    url = "https://opendev.org/openstack/nova/commit/86823b5c.patch"

    repo_cmd.patch(project="nova", source=url, release="stein")

    assert world.journal[-2:] == ["checkout nova stable/stein", f"apply {url}"]


# =============================================================================
# Typer wiring
# =============================================================================


def test_version_option() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_rebase_through_cli(world: FakeWorld) -> None:
    result = CliRunner().invoke(
        app, ["rebase", "nova", "19.0.1", "--release", "stein", "--bugid", "654321"]
    )

    assert result.exit_code == 0
    assert world.entries == [
        ("2:19.0.1-0ubuntu1", "New upstream release for OpenStack Stein. (LP# 654321).")
    ]


def test_unknown_kind_is_rejected() -> None:
    result = CliRunner().invoke(app, ["rebase", "nova", "19.0.1", "--kind", "weird"])

    assert result.exit_code != 0
