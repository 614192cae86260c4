"""Tests for uosp.core.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from uosp.core.config import (
    Config,
    LaunchpadConfig,
    default_config_paths,
    load_config,
    load_config_or_default,
)
from uosp.core.result import Err, Ok


class TestConfigDefaults:
    def test_release_defaults(self) -> None:
        config = Config()
        assert config.release.stable_branch_prefix == "stable"
        assert config.release.master_release == "ussuri"
        assert config.release.revision_suffix == "0ubuntu1"

    def test_tarballs_dir_expands_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert Config().paths.tarballs_dir == tmp_path / "tarballs"

    def test_push_url(self) -> None:
        assert LaunchpadConfig().format_push_url(account="me", name="nova") == (
            "git+ssh://me@git.launchpad.net/~me/ubuntu/+source/nova"
        )


class TestLoadConfig:
    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "uosp.toml"
        path.write_text(
            "\n".join(
                [
                    "[release]",
                    'stable_branch_prefix = "ubuntu"',
                    'master_release = "victoria"',
                    'revision_suffix = "0ubuntu0"',
                    "[paths]",
                    'tarballs = "/srv/tarballs"',
                    "[launchpad]",
                    'push_url = "ssh://{account}/{name}"',
                ]
            ),
            encoding="utf-8",
        )

        result = load_config(path)

        assert isinstance(result, Ok)
        config = result.value
        assert config.release.stable_branch_prefix == "ubuntu"
        assert config.release.master_release == "victoria"
        assert config.release.revision_suffix == "0ubuntu0"
        assert config.paths.tarballs_dir == Path("/srv/tarballs")
        assert config.launchpad.format_push_url(account="a", name="n") == "ssh://a/n"

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "uosp.toml"
        path.write_text('[release]\nmaster_release = "train"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.release.master_release == "train"
        assert result.value.release.stable_branch_prefix == "stable"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "uosp.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")

        assert isinstance(result, Err)
        assert result.error.path == tmp_path / "nope.toml"

    def test_directory_is_config_error(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path, explicit=tmp_path)

        assert isinstance(result, Err)
        assert result.error.path == tmp_path
        assert "Error reading config" in result.error.message


class TestLoadConfigOrDefault:
    def test_defaults_when_nothing_exists(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert load_config_or_default(tmp_path) == Ok(Config())

    def test_root_file_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        xdg = tmp_path / "xdg"
        (xdg / "uosp").mkdir(parents=True)
        (xdg / "uosp" / "config.toml").write_text(
            '[release]\nmaster_release = "user"\n', encoding="utf-8"
        )
        (tmp_path / "uosp.toml").write_text(
            '[release]\nmaster_release = "root"\n', encoding="utf-8"
        )
        monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))

        result = load_config_or_default(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.release.master_release == "root"

    def test_user_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        xdg = tmp_path / "xdg"
        (xdg / "uosp").mkdir(parents=True)
        (xdg / "uosp" / "config.toml").write_text(
            '[release]\nmaster_release = "user"\n', encoding="utf-8"
        )
        monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))

        result = load_config_or_default(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.release.master_release == "user"

    def test_explicit_missing_is_error(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path, tmp_path / "custom.toml")

        assert isinstance(result, Err)

    def test_candidate_order(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg")

        assert default_config_paths(tmp_path) == (
            tmp_path / "uosp.toml",
            Path("/xdg/uosp/config.toml"),
        )
