from __future__ import annotations

from uosp.release.branch import format_branch, release_label


def test_format_branch_master() -> None:
    assert format_branch("master") == "master"


def test_format_branch_stable() -> None:
    assert format_branch("stein") == "stable/stein"


def test_format_branch_custom_prefix() -> None:
    assert format_branch("stein", "ubuntu") == "ubuntu/stein"


def test_release_label() -> None:
    assert release_label("stein", "ussuri") == "Stein"
    assert release_label("master", "train") == "Train"
    assert release_label("", "train") == ""
