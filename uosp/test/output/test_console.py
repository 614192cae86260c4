from __future__ import annotations

from uosp.output.console import MockConsole, Style
from uosp.output.errors import failure_exit_code, print_failure
from uosp.release.errors import ReleaseError, WorkflowFailure


def test_mock_console_records_styles() -> None:
    console = MockConsole()

    console.header("Cloning package 'nova'...")
    console.command(["git", "checkout", "master"])
    console.warning("Please consider to check (build-)deps.")
    console.success("done.")

    assert console.outputs[0].style == Style.HEADER
    assert console.commands == ["git checkout master"]
    assert console.has_warning()
    assert not console.has_error()
    assert console.messages[-1] == "done."


def test_print_failure() -> None:
    console = MockConsole()
    failure = WorkflowFailure(
        operation="rebase",
        step="import",
        error=ReleaseError(kind="import", message="unable to import 19.0.1 to nova", hint="gbp"),
    )

    print_failure(failure, console)

    assert console.has_error()
    assert console.messages == [
        "error: rebase failed at import: unable to import 19.0.1 to nova",
        "hint: gbp",
    ]
    assert failure_exit_code(failure) == 1
