"""
Parsers: raw argument text -> Command.

Each parser validates everything it can without looking at the model, so a
command that reaches `execute` is well-formed. `MedBookParser` picks the
parser from the command word.
"""

import abc
import re
import typing

from . import parser_util
from .commands import (
    AddCommand,
    AddMedicalReportCommand,
    AddMedicineUsageCommand,
    ByIndex,
    ByNric,
    ClearCommand,
    ClearMedicineUsageCommand,
    Command,
    DeleteCommand,
    DeleteMedicalReportCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    NameContainsKeywordsPredicate,
    Target,
    ViewMedicalReportCommand,
)
from .exceptions import (
    InvalidCommandFormatException,
    InvalidFieldContentException,
    UnknownCommandException,
)
from .patient import FIELD_CONSTRAINTS, MedicalReport, MedicineUsage, Patient, is_valid_field
from .syntax import (
    PREFIX_ALLERGY,
    PREFIX_DOSAGE,
    PREFIX_END_DATE,
    PREFIX_ILLNESS,
    PREFIX_IMMUNIZATION,
    PREFIX_MEDICINE_NAME,
    PREFIX_NAME,
    PREFIX_NRIC,
    PREFIX_PHONE,
    PREFIX_START_DATE,
    PREFIX_SURGERY,
)
from .tokenizer import ArgumentMultimap, ArgumentTokenizer

C = typing.TypeVar("C", bound=Command)
T = typing.TypeVar("T")

# command word, then everything after it (leading whitespace kept)
_BASIC_COMMAND_FORMAT = re.compile(r"^(?P<command_word>\S+)(?P<arguments>.*)$", re.DOTALL)


class Parser(typing.Generic[C], metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def parse(self, args: str) -> C:
        raise NotImplementedError


def parse_target(argmap: ArgumentMultimap, usage: str) -> Target:
    """
    Exactly one of `n/NRIC` (with an empty preamble) or a bare positive
    INDEX (with no `n/`) selects the patient.
    """
    nric_values = argmap.get_all_values(PREFIX_NRIC)
    has_preamble = bool(argmap.preamble)

    if nric_values and not has_preamble:
        argmap.verify_no_duplicate_prefixes_for(PREFIX_NRIC)
        return ByNric(parser_util.parse_nric(nric_values[-1]))

    if has_preamble and not nric_values:
        try:
            return ByIndex(parser_util.parse_index(argmap.preamble))
        except InvalidFieldContentException as e:
            raise InvalidCommandFormatException(usage) from e

    raise InvalidCommandFormatException(usage)


def _wrap_value_error(func: typing.Callable[[], T]) -> T:
    # domain constructors raise ValueError; surface it as a parse failure
    try:
        return func()
    except ValueError as e:
        raise InvalidFieldContentException(str(e)) from e


class AddCommandParser(Parser[AddCommand]):
    def parse(self, args: str) -> AddCommand:
        argmap = ArgumentTokenizer.tokenize(args, PREFIX_NAME, PREFIX_NRIC, PREFIX_PHONE)
        if not argmap.is_present(PREFIX_NAME, PREFIX_NRIC, PREFIX_PHONE) or argmap.preamble:
            raise InvalidCommandFormatException(AddCommand.MESSAGE_USAGE)
        argmap.verify_no_duplicate_prefixes_for(PREFIX_NAME, PREFIX_NRIC, PREFIX_PHONE)

        nric = parser_util.parse_nric(argmap.get_value(PREFIX_NRIC))
        patient = _wrap_value_error(
            lambda: Patient(
                name=" ".join(argmap.get_value(PREFIX_NAME).split()),
                nric=nric,
                phone=argmap.get_value(PREFIX_PHONE).strip(),
            )
        )
        return AddCommand(patient)


class DeleteCommandParser(Parser[DeleteCommand]):
    def parse(self, args: str) -> DeleteCommand:
        argmap = ArgumentTokenizer.tokenize(args, PREFIX_NRIC)
        return DeleteCommand(parse_target(argmap, DeleteCommand.MESSAGE_USAGE))


class FindCommandParser(Parser[FindCommand]):
    def parse(self, args: str) -> FindCommand:
        keywords = tuple(args.split())
        if not keywords:
            raise InvalidCommandFormatException(FindCommand.MESSAGE_USAGE)
        return FindCommand(NameContainsKeywordsPredicate(keywords))


class AddMedicalReportCommandParser(Parser[AddMedicalReportCommand]):
    _PREFIXES = (PREFIX_NRIC, PREFIX_ALLERGY, PREFIX_ILLNESS, PREFIX_SURGERY, PREFIX_IMMUNIZATION)

    def parse(self, args: str) -> AddMedicalReportCommand:
        """
        Parses `n/NRIC [al/..] [ill/..] [sur/..] [imm/..]`.

        Missing report fields become "None". If any of the four fields breaks
        the free-text rule the whole input is rejected with one generic message;
        the failing field is not singled out.
        """
        argmap = ArgumentTokenizer.tokenize(args, *self._PREFIXES)

        if not argmap.is_present(PREFIX_NRIC) or argmap.preamble:
            raise InvalidCommandFormatException(AddMedicalReportCommand.MESSAGE_USAGE)

        argmap.verify_no_duplicate_prefixes_for(*self._PREFIXES)

        nric = parser_util.parse_nric(argmap.get_value(PREFIX_NRIC))
        allergy = parser_util.parse_field(argmap.get_value(PREFIX_ALLERGY))
        illness = parser_util.parse_field(argmap.get_value(PREFIX_ILLNESS))
        surgery = parser_util.parse_field(argmap.get_value(PREFIX_SURGERY))
        immunization = parser_util.parse_field(argmap.get_value(PREFIX_IMMUNIZATION))

        if not all(is_valid_field(value) for value in (allergy, illness, surgery, immunization)):
            raise InvalidFieldContentException(FIELD_CONSTRAINTS)

        return AddMedicalReportCommand(nric, MedicalReport(allergy, illness, surgery, immunization))


class ViewMedicalReportCommandParser(Parser[ViewMedicalReportCommand]):
    def parse(self, args: str) -> ViewMedicalReportCommand:
        argmap = ArgumentTokenizer.tokenize(args, PREFIX_NRIC)
        return ViewMedicalReportCommand(parse_target(argmap, ViewMedicalReportCommand.MESSAGE_USAGE))


class DeleteMedicalReportCommandParser(Parser[DeleteMedicalReportCommand]):
    def parse(self, args: str) -> DeleteMedicalReportCommand:
        argmap = ArgumentTokenizer.tokenize(args, PREFIX_NRIC)
        return DeleteMedicalReportCommand(parse_target(argmap, DeleteMedicalReportCommand.MESSAGE_USAGE))


class AddMedicineUsageCommandParser(Parser[AddMedicineUsageCommand]):
    _USAGE_PREFIXES = (PREFIX_MEDICINE_NAME, PREFIX_DOSAGE, PREFIX_START_DATE, PREFIX_END_DATE)

    def parse(self, args: str) -> AddMedicineUsageCommand:
        argmap = ArgumentTokenizer.tokenize(args, PREFIX_NRIC, *self._USAGE_PREFIXES)
        usage_text = AddMedicineUsageCommand.MESSAGE_USAGE

        if not argmap.is_present(*self._USAGE_PREFIXES):
            raise InvalidCommandFormatException(usage_text)
        argmap.verify_no_duplicate_prefixes_for(PREFIX_NRIC, *self._USAGE_PREFIXES)

        target = parse_target(argmap, usage_text)
        name = parser_util.parse_required_field(argmap.get_value(PREFIX_MEDICINE_NAME))
        dosage = argmap.get_value(PREFIX_DOSAGE).strip()
        start_date = parser_util.parse_date(argmap.get_value(PREFIX_START_DATE))
        end_date = parser_util.parse_date(argmap.get_value(PREFIX_END_DATE))

        usage = _wrap_value_error(lambda: MedicineUsage(name, dosage, start_date, end_date))
        return AddMedicineUsageCommand(target, usage)


class ClearMedicineUsageCommandParser(Parser[ClearMedicineUsageCommand]):
    def parse(self, args: str) -> ClearMedicineUsageCommand:
        argmap = ArgumentTokenizer.tokenize(args, PREFIX_NRIC)
        return ClearMedicineUsageCommand(parse_target(argmap, ClearMedicineUsageCommand.MESSAGE_USAGE))


class _NoArgumentParser(Parser[C]):
    """For commands that take no arguments; trailing text is ignored."""

    def __init__(self, command: typing.Callable[[], C]):
        self._command = command

    def parse(self, args: str) -> C:
        return self._command()


class MedBookParser:
    """Splits user input into a command word and arguments and dispatches."""

    def __init__(self):
        self._parsers: dict[str, Parser] = {
            AddCommand.COMMAND_WORD: AddCommandParser(),
            DeleteCommand.COMMAND_WORD: DeleteCommandParser(),
            ListCommand.COMMAND_WORD: _NoArgumentParser(ListCommand),
            FindCommand.COMMAND_WORD: FindCommandParser(),
            ClearCommand.COMMAND_WORD: _NoArgumentParser(ClearCommand),
            AddMedicalReportCommand.COMMAND_WORD: AddMedicalReportCommandParser(),
            ViewMedicalReportCommand.COMMAND_WORD: ViewMedicalReportCommandParser(),
            DeleteMedicalReportCommand.COMMAND_WORD: DeleteMedicalReportCommandParser(),
            AddMedicineUsageCommand.COMMAND_WORD: AddMedicineUsageCommandParser(),
            ClearMedicineUsageCommand.COMMAND_WORD: ClearMedicineUsageCommandParser(),
            HelpCommand.COMMAND_WORD: _NoArgumentParser(HelpCommand),
            ExitCommand.COMMAND_WORD: _NoArgumentParser(ExitCommand),
        }

    def parse_command(self, user_input: str) -> Command:
        m = _BASIC_COMMAND_FORMAT.match(user_input.strip())
        if not m:
            raise InvalidCommandFormatException(HelpCommand.MESSAGE_USAGE)

        command_word = m.group("command_word")
        parser = self._parsers.get(command_word)
        if parser is None:
            raise UnknownCommandException(command_word)
        return parser.parse(m.group("arguments"))

