from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from uosp.core.config import Config, load_config_or_default
from uosp.core.errors import ErrorCode
from uosp.core.result import Err
from uosp.output.console import ConsoleProtocol, RichConsole
from uosp.services.packaging import DebianPackagingTools
from uosp.services.workflow import PackageWorkflow

# Set by the `--root` / `--config` global options.
ROOT_ENV = "UOSP_ROOT"
CONFIG_ENV = "UOSP_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root_dir: Path
    config: Config
    console: ConsoleProtocol
    workflow: PackageWorkflow


def build_context() -> CLIContext:
    console = RichConsole()

    root_env = os.environ.get(ROOT_ENV)
    root_dir = Path(root_env).expanduser().resolve() if root_env else Path.cwd()

    config_env = os.environ.get(CONFIG_ENV)
    explicit = Path(config_env).expanduser() if config_env else None
    config_result = load_config_or_default(root_dir, explicit)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    config = config_result.value

    tools = DebianPackagingTools(console=console, tarballs_dir=config.paths.tarballs_dir)
    return CLIContext(
        root_dir=root_dir,
        config=config,
        console=console,
        workflow=PackageWorkflow(
            root_dir=root_dir,
            config=config,
            console=console,
            tools=tools,
        ),
    )
