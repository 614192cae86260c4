from __future__ import annotations

from pathlib import Path

from uosp.core.result import Err, Ok
from uosp.services.package import Package, create_package


def test_create_package_makes_build_area(tmp_path: Path) -> None:
    result = create_package("nova", tmp_path)

    assert isinstance(result, Ok)
    assert (tmp_path / "build-area").is_dir()
    assert not (tmp_path / "nova").exists()


def test_create_package_is_idempotent(tmp_path: Path) -> None:
    (tmp_path / "build-area").mkdir()

    assert isinstance(create_package("nova", tmp_path), Ok)


def test_create_package_rejects_paths(tmp_path: Path) -> None:
    result = create_package("../nova", tmp_path)

    assert isinstance(result, Err)
    assert result.error.kind == "fatal"


def test_create_package_unwritable_root(tmp_path: Path) -> None:
    blocker = tmp_path / "root"
    blocker.write_text("not a directory", encoding="utf-8")

    result = create_package("nova", blocker)

    assert isinstance(result, Err)
    assert result.error.kind == "fatal"


def test_layout(tmp_path: Path) -> None:
    package = Package(name="python-novaclient", root_dir=tmp_path)

    assert package.work_dir == tmp_path / "python-novaclient"
    assert package.build_dir == tmp_path / "build-area"
    assert package.mirror_dir("novaclient") == tmp_path / "t" / "novaclient"
    assert package.orig_tarball("1.0") == tmp_path / "python-novaclient_1.0.orig.tar.gz"
    assert package.orig_tarball("1.0", "novaclient") == tmp_path / "novaclient_1.0.orig.tar.gz"
    assert package.dsc_path("1.0-0ubuntu1") == "build-area/python-novaclient_1.0-0ubuntu1.dsc"
