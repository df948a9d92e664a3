"""
Glue between the front end and the command layer.

One call to `LogicManager.execute` handles one line of input: parse it,
check that the patient it targets exists, ask for confirmation if the command
is destructive, then run it against the model. Parse and command errors
propagate to the caller unchanged.
"""

import logging
import typing

from .commands import Command, CommandResult
from .exceptions import CommandException, ParseException
from .messages import MESSAGE_CANCELLED
from .model import Model
from .parsers import MedBookParser

LOGGER = logging.getLogger(__name__)

# Called with the parsed command; returns True to go ahead.
ConfirmCallback = typing.Callable[[Command], bool]


def _always_confirm(command: Command) -> bool:
    return True


class LogicManager:
    def __init__(
        self,
        model: Model,
        confirm: ConfirmCallback = _always_confirm,
        parser: MedBookParser | None = None,
    ):
        self._model = model
        self._confirm = confirm
        self._parser = parser if parser is not None else MedBookParser()

    def execute(self, command_text: str) -> CommandResult:
        """
        Parse and run one line of user input.

        A missing patient or an index past the displayed list is reported
        before the user is asked to confirm anything.

        Raises:
            ParseException: the input is malformed (the model is not touched).
            CommandException: the command cannot be applied (the model is not touched).
        """
        LOGGER.info(f"User command: {command_text!r}")
        try:
            command = self._parser.parse_command(command_text)
        except ParseException as e:
            LOGGER.warning(f"Rejected input {command_text!r}: {e}")
            raise
        LOGGER.debug(f"Parsed {command!r}")

        try:
            if command.requires_confirmation:
                command.check(self._model)
                if not self._confirm(command):
                    LOGGER.info(f"Cancelled {type(command).__name__}")
                    return CommandResult(MESSAGE_CANCELLED, cancelled=True)
            result = command.execute(self._model)
        except CommandException as e:
            LOGGER.warning(f"{type(command).__name__} failed: {e}")
            raise
        LOGGER.debug(f"Result: {result.feedback_to_user!r}")
        return result
