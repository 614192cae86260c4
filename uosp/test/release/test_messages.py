from __future__ import annotations

import pytest

from uosp.release.messages import (
    GenericRelease,
    GenericReleaseWithBug,
    ReleaseMessage,
    SnapshotRelease,
    UpstreamRelease,
    UpstreamReleaseWithBug,
    rebase_message,
    render,
    snapshot_message,
)


@pytest.mark.parametrize(
    ("message", "text"),
    [
        (UpstreamRelease("Train"), "New upstream release for OpenStack Train."),
        (
            UpstreamReleaseWithBug("Train", "123456"),
            "New upstream release for OpenStack Train. (LP# 123456).",
        ),
        (SnapshotRelease("Ussuri"), "New upstream snapshot for OpenStack Ussuri."),
        (GenericRelease("1.2.3"), "New upstream release 1.2.3."),
        (GenericReleaseWithBug("1.2.3", "42"), "New upstream release 1.2.3. (LP# 42)."),
    ],
)
def test_render(message: ReleaseMessage, text: str) -> None:
    assert render(message) == text


def test_rebase_message_openstack_with_bug() -> None:
    message = rebase_message(
        kind="openstack", release="stein", version="19.0.1", bug_id="654321", master_release="train"
    )
    assert message == UpstreamReleaseWithBug(label="Stein", bug_id="654321")


def test_rebase_message_openstack_master_uses_master_release() -> None:
    message = rebase_message(
        kind="openstack", release="master", version="20.0.0", bug_id=None, master_release="ussuri"
    )
    assert message == UpstreamRelease(label="Ussuri")


def test_rebase_message_regular() -> None:
    message = rebase_message(
        kind="regular", release="stein", version="1.2.3", bug_id=None, master_release="train"
    )
    assert message == GenericRelease(version="1.2.3")


def test_rebase_message_empty_bug_is_ignored() -> None:
    message = rebase_message(
        kind="regular", release="master", version="1.2.3", bug_id="", master_release="train"
    )
    assert message == GenericRelease(version="1.2.3")


def test_snapshot_message() -> None:
    assert snapshot_message(release="master", master_release="ussuri") == SnapshotRelease("Ussuri")
