"""Subprocess execution with Result-based error handling.

Every external tool (git, gbp, uscan, debchange, backportpackage...) is
run through one of these two helpers. A non-zero exit status is the only
failure signal; the tool's output is never parsed to classify errors.

There is deliberately no timeout: a step blocks until its tool returns.

Usage:
    match run(["git", "rev-parse", "--short", "HEAD"], cwd=workdir):
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from uosp.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process, -1 if it could not start;
            negative when it was killed by a signal.
        stdout: Standard output (empty for streamed commands).
        stderr: Standard error, or the OS error when the tool is missing.
        spawned: False when the executable could not be started at all.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    spawned: bool = True

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    input_text: str | None = None,
) -> Result[str, ProcessError]:
    """Execute a command, capturing its output.

    `input_text`, when given, is written to the command's standard input.

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            input=input_text,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd), returncode=-1, stdout="", stderr=str(e), spawned=False
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_streaming(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command attached to the terminal.

    Packaging tools prompt and print progress, so their output goes
    straight to the operator instead of being captured.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd), returncode=-1, stdout="", stderr=str(e), spawned=False
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
