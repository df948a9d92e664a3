"""
Error taxonomy for MedBook.

Parsing failures derive from ParseException and are raised before any model
access. Execution failures derive from CommandException and are raised before
any model mutation. Neither kind is fatal; the front end reports the message
and reads the next command.
"""


class ParseException(Exception):
    """Raised when user input does not conform to the expected format."""


class InvalidCommandFormatException(ParseException):
    """Missing required prefix, unexpected preamble or otherwise malformed syntax."""

    def __init__(self, usage: str):
        self.usage = usage
        super().__init__(f"Invalid command format! \n{usage}")


class UnknownCommandException(ParseException):
    """The command word is not one MedBook understands."""

    def __init__(self, command_word: str):
        self.command_word = command_word
        super().__init__(f"Unknown command: {command_word!r}")


class DuplicatePrefixException(ParseException):
    """A single-valued prefix was given more than once."""

    def __init__(self, prefixes):
        self.prefixes = tuple(prefixes)
        listed = " ".join(str(prefix) for prefix in self.prefixes)
        super().__init__(
            f"Multiple values specified for the following single-valued field(s): {listed}"
        )


class InvalidFieldContentException(ParseException):
    """A field value failed its content rule."""


class CommandException(Exception):
    """Raised when a parsed command cannot be applied to the model."""


class InvalidDisplayedIndexException(CommandException):
    """The index is outside the currently displayed patient list."""


class PersonNotFoundException(CommandException):
    """The NRIC or resolved index does not correspond to a patient."""


class DuplicatePersonException(CommandException):
    """A patient with the same NRIC already exists."""


class DuplicateMedicineUsageException(CommandException):
    """The patient already has an identical medicine usage."""
