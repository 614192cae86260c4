"""Typed configuration loading.

The workflow never reads process-wide constants: the stable branch
prefix, the release name used for `master` and the other policy values
live in an immutable `Config` built once per invocation.

Example `uosp.toml`:

    [release]
    stable_branch_prefix = "stable"
    master_release = "ussuri"
    revision_suffix = "0ubuntu1"

    [paths]
    tarballs = "~/tarballs"

    [launchpad]
    push_url = "git+ssh://{account}@git.launchpad.net/~{account}/ubuntu/+source/{name}"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "LaunchpadConfig",
    "PathsConfig",
    "ReleaseConfig",
    "CONFIG_FILE_NAME",
    "default_config_paths",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "uosp.toml"

DEFAULT_STABLE_BRANCH_PREFIX = "stable"
DEFAULT_MASTER_RELEASE = "ussuri"
DEFAULT_REVISION_SUFFIX = "0ubuntu1"
DEFAULT_TARBALLS_DIR = "~/tarballs"
DEFAULT_LAUNCHPAD_PUSH_URL = (
    "git+ssh://{account}@git.launchpad.net/~{account}/ubuntu/+source/{name}"
)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Release naming policy."""

    stable_branch_prefix: str = DEFAULT_STABLE_BRANCH_PREFIX
    # Release name recorded in changelog messages when rebasing `master`.
    master_release: str = DEFAULT_MASTER_RELEASE
    revision_suffix: str = DEFAULT_REVISION_SUFFIX


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Filesystem locations outside the package root."""

    # Where pkgos-generate-snapshot drops its tarballs.
    tarballs: str = DEFAULT_TARBALLS_DIR

    @property
    def tarballs_dir(self) -> Path:
        return Path(os.path.expandvars(self.tarballs)).expanduser()


@dataclass(frozen=True, slots=True)
class LaunchpadConfig:
    push_url: str = DEFAULT_LAUNCHPAD_PUSH_URL

    def format_push_url(self, *, account: str, name: str) -> str:
        return self.push_url.format(account=account, name=name)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    launchpad: LaunchpadConfig = field(default_factory=LaunchpadConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        paths: StrDict = get_table(data, "paths") or {}
        launchpad: StrDict = get_table(data, "launchpad") or {}

        return cls(
            release=ReleaseConfig(
                stable_branch_prefix=get_str(release, "stable_branch_prefix")
                or DEFAULT_STABLE_BRANCH_PREFIX,
                master_release=get_str(release, "master_release") or DEFAULT_MASTER_RELEASE,
                revision_suffix=get_str(release, "revision_suffix") or DEFAULT_REVISION_SUFFIX,
            ),
            paths=PathsConfig(
                tarballs=get_str(paths, "tarballs") or DEFAULT_TARBALLS_DIR,
            ),
            launchpad=LaunchpadConfig(
                push_url=get_str(launchpad, "push_url") or DEFAULT_LAUNCHPAD_PUSH_URL,
            ),
        )


def default_config_paths(root_dir: Path) -> tuple[Path, ...]:
    """Candidate config files, most specific first."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    user_dir = Path(xdg) if xdg else Path.home() / ".config"
    return (root_dir / CONFIG_FILE_NAME, user_dir / "uosp" / "config.toml")


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(root_dir: Path, explicit: Path | None = None) -> Result[Config, ConfigError]:
    """Resolve the config for an invocation.

    An explicit path must exist. Otherwise the first existing candidate
    from `default_config_paths` is used, and defaults apply when none
    exists.
    """
    if explicit is not None:
        return load_config(explicit)

    for candidate in default_config_paths(root_dir):
        if candidate.is_file():
            return load_config(candidate)
    return Ok(Config())
