"""
Command-line interface for MedBook.

`medbook shell` reads commands interactively; `medbook run-script` runs
command files line by line and reports failures at the end. Both start from
an empty in-memory record book.

Environment flags
----------------------------------------
MEDBOOK_ASSUME_YES=1 : Run destructive commands without asking.
MEDBOOK_PROMPT       : Shell prompt suffix (default "> ").
"""

import logging
import os
import pathlib
import sys
import typing

import click
from stairval.notepad import Notepad, create_notepad

from .commands import Command
from .exceptions import CommandException, ParseException
from .logic import LogicManager
from .messages import MESSAGE_CANCELLED
from .model import ModelManager


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "t", "yes", "y"}


_ASSUME_YES = _env_flag("MEDBOOK_ASSUME_YES")
_PROMPT = os.getenv("MEDBOOK_PROMPT", "> ")

# Lines starting with this are ignored in command scripts
_COMMENT_MARKER = "#"


@click.group()
def main():
    """MedBook: a command-driven record book for patients and their medical data."""
    pass


def _verbose_option(func):
    return click.option(
        "--verbose-logging",
        is_flag=True,
        help="Also emit debug logs to stderr",
    )(func)


def _log_file_option(func):
    return click.option(
        "--log-file-path",
        type=click.Path(dir_okay=False, writable=True),
        help="Append timestamped logs to this file",
    )(func)


def _yes_option(func):
    return click.option(
        "-y",
        "--yes",
        "assume_yes",
        is_flag=True,
        default=_ASSUME_YES,
        help="Run destructive commands (delete, clear, clearmu, deletemr) without asking",
    )(func)


@main.command(name="shell")
@_yes_option
@_verbose_option
@_log_file_option
def shell(assume_yes: bool, verbose_logging: bool, log_file_path: typing.Optional[str]):
    """
    Read commands one at a time until `exit` or end of input.
    """
    _configure_logging(verbose_logging, log_file_path)
    logic = LogicManager(
        ModelManager(),
        confirm=(lambda command: True) if assume_yes else _confirm_interactively,
    )
    click.echo("Welcome to MedBook. Type `help` to see the available commands.")

    while True:
        try:
            line = click.prompt("medbook", prompt_suffix=_PROMPT, default="", show_default=False)
        except click.Abort:
            # end of input
            click.echo("")
            break
        if not line.strip():
            continue

        try:
            result = logic.execute(line)
        except (ParseException, CommandException) as e:
            click.echo(click.style(str(e), fg="red"), err=True)
            continue
        except click.Abort:
            # end of input at the confirmation question
            click.echo("")
            click.echo(MESSAGE_CANCELLED)
            continue

        click.echo(result.feedback_to_user)
        if result.exit:
            break


@main.command(name="run-script")
@click.argument(
    "script_paths",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False),
)
@_yes_option
@_verbose_option
@_log_file_option
def run_script(
    script_paths: tuple[str, ...],
    assume_yes: bool,
    verbose_logging: bool,
    log_file_path: typing.Optional[str],
):
    """
    Run every command in the given files against one record book.
    Blank lines and lines starting with `#` are skipped.
    """
    if not script_paths:
        click.echo("❌  No input files specified.", err=True)
        sys.exit(1)

    _configure_logging(verbose_logging, log_file_path)
    notepad = create_notepad("medbook")
    model = ModelManager()

    executed = 0
    for script_path in script_paths:
        logging.info(f"Running script '{script_path}'")
        executed += _run_script_file(pathlib.Path(script_path), model, assume_yes, notepad)

    _report_issues(notepad)
    click.echo(f"Executed {executed} commands")
    if notepad.has_errors(include_subsections=True):
        sys.exit(1)


def _run_script_file(script_path: pathlib.Path, model: ModelManager, assume_yes: bool, notepad: Notepad) -> int:
    # returns the number of commands that ran to completion
    executed = 0
    location = script_path.name

    def confirm(command: Command) -> bool:
        if not assume_yes:
            notepad.add_warning(f"{location}: skipped '{command.COMMAND_WORD}', destructive commands need --yes")
        return assume_yes

    logic = LogicManager(model, confirm=confirm)
    with open(script_path, encoding="utf-8") as script:
        for line_number, raw_line in enumerate(script, start=1):
            line = raw_line.strip()
            if not line or line.startswith(_COMMENT_MARKER):
                continue
            location = f"{script_path.name}:{line_number}"

            try:
                result = logic.execute(line)
            except (ParseException, CommandException) as e:
                notepad.add_error(f"{location}: {e}")
                continue

            click.echo(result.feedback_to_user)
            if not result.cancelled:
                executed += 1
            if result.exit:
                break
    return executed


def _confirm_interactively(command: Command) -> bool:
    return click.confirm(
        f"'{command.COMMAND_WORD}' cannot be undone. Continue?",
        default=False,
    )


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


def _report_issues(notepad: Notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in script:")
        for err in notepad.errors():
            click.echo(f"- {err.message}")
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in script:")
        for w in notepad.warnings():
            click.echo(f"- {w.message}")


if __name__ == "__main__":
    main()
