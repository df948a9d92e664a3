"""
Executable commands.

A command is an immutable value built by a parser. `execute(model)` performs a
single lookup, checks the business rule, makes at most one mutating call on
the model and returns a CommandResult. Every check happens before the
mutation, so a failing command leaves the model untouched.

Commands that act on one patient hold a Target: either ByNric or ByIndex,
never both and never neither.
"""

import abc
import typing
from dataclasses import dataclass

from . import messages
from .exceptions import (
    DuplicateMedicineUsageException,
    DuplicatePersonException,
    InvalidDisplayedIndexException,
    PersonNotFoundException,
)
from .index import Index
from .model import SHOW_ALL_PATIENTS, Model
from .nric import Nric
from .patient import MedicalReport, MedicineUsage, Patient
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


# ---------------------------------
# Targets
# ---------------------------------


@dataclass(frozen=True)
class ByNric:
    """Target the patient with this NRIC in the full collection."""

    nric: Nric

    def describe(self) -> str:
        return str(self.nric)


@dataclass(frozen=True)
class ByIndex:
    """Target the patient at this position of the displayed list."""

    index: Index

    def describe(self) -> str:
        return f"patient at index {self.index.one_based}"


Target = typing.Union[ByNric, ByIndex]


def resolve_target(target: Target, model: Model) -> Patient:
    """
    Look up the patient a target refers to.

    Raises:
        PersonNotFoundException: no patient has the NRIC, or the displayed
            list holds no patient at the index.
        InvalidDisplayedIndexException: the index is past the end of the
            displayed list.
    """
    if isinstance(target, ByNric):
        patient = model.find_patient_by_nric(target.nric)
        if patient is None:
            raise PersonNotFoundException(messages.MESSAGE_PERSON_NOT_FOUND_NRIC.format(target.nric))
        return patient
    if not isinstance(target, ByIndex):
        raise TypeError(f"Target must be ByNric or ByIndex, got {type(target).__name__}")

    shown = model.filtered_patient_list
    if target.index.zero_based >= len(shown):
        raise InvalidDisplayedIndexException(messages.MESSAGE_INVALID_PATIENT_DISPLAYED_INDEX)
    patient = shown[target.index.zero_based]
    if patient is None:
        # a view handed in by another Model implementation may have holes
        raise PersonNotFoundException(messages.MESSAGE_PERSON_NOT_FOUND_ID.format(target.index.one_based))
    return patient


def _usage_for_targeted(command_word: str, action: str) -> str:
    return (
        f"{command_word}: {action} identified by NRIC, OR by the index number used in the "
        "displayed patient list. However, it cannot be both NRIC and index.\n"
        f"Parameters for first method: {PREFIX_NRIC}NRIC\n"
        f"Example: {command_word} {PREFIX_NRIC}S1234567A\n"
        "Parameters for second method: INDEX (must be a positive integer)\n"
        f"Example: {command_word} 1"
    )


# ---------------------------------
# Base classes
# ---------------------------------


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of a successful command.

    Attributes:
        feedback_to_user: Text to show.
        show_help: The front end should show the help text.
        exit: The front end should stop reading commands.
        cancelled: The user declined a destructive command; nothing ran.
    """

    feedback_to_user: str
    show_help: bool = False
    exit: bool = False
    cancelled: bool = False


class Command(metaclass=abc.ABCMeta):
    # the front end must ask the user before calling execute()
    requires_confirmation: typing.ClassVar[bool] = False

    def check(self, model: Model) -> None:
        """
        Raise the CommandException that `execute` would raise for a missing
        patient, without touching the model. Run before asking for confirmation.
        """
        pass

    @abc.abstractmethod
    def execute(self, model: Model) -> CommandResult:
        raise NotImplementedError


@dataclass(frozen=True)
class TargetedCommand(Command):
    """A command acting on the one patient its target selects."""

    target: Target

    def __post_init__(self):
        if not isinstance(self.target, (ByNric, ByIndex)):
            raise ValueError(f"target must be ByNric or ByIndex, got {type(self.target).__name__}")

    def check(self, model: Model) -> None:
        resolve_target(self.target, model)


# ---------------------------------
# Patient commands
# ---------------------------------


@dataclass(frozen=True)
class AddCommand(Command):
    patient: Patient

    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a patient to MedBook.\n"
        f"Parameters: {PREFIX_NAME}NAME {PREFIX_NRIC}NRIC {PREFIX_PHONE}PHONE\n"
        f"Example: {COMMAND_WORD} {PREFIX_NAME}John Doe {PREFIX_NRIC}S1234567A {PREFIX_PHONE}98765432"
    )
    MESSAGE_SUCCESS = "New patient added: {}"
    MESSAGE_DUPLICATE_PATIENT = "A patient with NRIC {} already exists in MedBook"

    def execute(self, model: Model) -> CommandResult:
        if model.has_patient(self.patient):
            raise DuplicatePersonException(self.MESSAGE_DUPLICATE_PATIENT.format(self.patient.nric))
        model.add_patient(self.patient)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.patient))


@dataclass(frozen=True)
class DeleteCommand(TargetedCommand):
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = _usage_for_targeted(COMMAND_WORD, "Deletes the patient")
    MESSAGE_SUCCESS = "Deleted Patient: {}"
    requires_confirmation = True

    def execute(self, model: Model) -> CommandResult:
        patient = resolve_target(self.target, model)
        model.delete_patient(patient)
        return CommandResult(self.MESSAGE_SUCCESS.format(patient))


@dataclass(frozen=True)
class ListCommand(Command):
    COMMAND_WORD = "list"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Lists all patients."
    MESSAGE_SUCCESS = "Listed all patients"

    def execute(self, model: Model) -> CommandResult:
        model.update_filtered_patient_list(SHOW_ALL_PATIENTS)
        listing = messages.format_patient_list(model.filtered_patient_list)
        return CommandResult(f"{self.MESSAGE_SUCCESS}\n{listing}" if listing else self.MESSAGE_SUCCESS)


@dataclass(frozen=True)
class NameContainsKeywordsPredicate:
    """True for patients whose name contains any keyword as a whole word (case-insensitive)."""

    keywords: tuple[str, ...]

    def __call__(self, patient: Patient) -> bool:
        words = {word.casefold() for word in patient.name.split()}
        return any(keyword.casefold() in words for keyword in self.keywords)


@dataclass(frozen=True)
class FindCommand(Command):
    predicate: NameContainsKeywordsPredicate

    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Finds all patients whose names contain any of the given keywords "
        "(case-insensitive) and displays them as a list with index numbers.\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        f"Example: {COMMAND_WORD} alice bob charlie"
    )

    def execute(self, model: Model) -> CommandResult:
        model.update_filtered_patient_list(self.predicate)
        shown = model.filtered_patient_list
        overview = messages.MESSAGE_PATIENTS_LISTED_OVERVIEW.format(len(shown))
        listing = messages.format_patient_list(shown)
        return CommandResult(f"{overview}\n{listing}" if listing else overview)


@dataclass(frozen=True)
class ClearCommand(Command):
    COMMAND_WORD = "clear"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Deletes every patient from MedBook."
    MESSAGE_SUCCESS = "MedBook has been cleared!"
    requires_confirmation = True

    def execute(self, model: Model) -> CommandResult:
        model.clear_patients()
        return CommandResult(self.MESSAGE_SUCCESS)


# ---------------------------------
# Medical report commands
# ---------------------------------


@dataclass(frozen=True)
class AddMedicalReportCommand(Command):
    """
    Replaces the allergy, illness, surgery and immunization fields of the
    patient with the given NRIC. Existing medicine usages are kept.
    """

    nric: Nric
    medical_report: MedicalReport

    COMMAND_WORD = "addmr"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a medical report to the patient identified by NRIC. "
        "Fields that are left out are recorded as None.\n"
        f"Parameters: {PREFIX_NRIC}NRIC [{PREFIX_ALLERGY}ALLERGY] [{PREFIX_ILLNESS}ILLNESS] "
        f"[{PREFIX_SURGERY}SURGERY] [{PREFIX_IMMUNIZATION}IMMUNIZATION]\n"
        f"Example: {COMMAND_WORD} {PREFIX_NRIC}S1234567A {PREFIX_ALLERGY}Peanuts "
        f"{PREFIX_ILLNESS}Flu {PREFIX_SURGERY}Appendectomy {PREFIX_IMMUNIZATION}MMR"
    )
    MESSAGE_SUCCESS = "Medical report added for patient with NRIC {}:\n{}"

    def check(self, model: Model) -> None:
        resolve_target(ByNric(self.nric), model)

    def execute(self, model: Model) -> CommandResult:
        patient = resolve_target(ByNric(self.nric), model)
        report = patient.medical_report.with_fields(self.medical_report)
        model.set_medical_report(patient, report)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.nric, report))


@dataclass(frozen=True)
class ViewMedicalReportCommand(TargetedCommand):
    COMMAND_WORD = "viewmr"
    MESSAGE_USAGE = _usage_for_targeted(COMMAND_WORD, "Shows the medical report of a patient")
    MESSAGE_SUCCESS = "Medical report of {} ({}):\n{}"

    def execute(self, model: Model) -> CommandResult:
        patient = resolve_target(self.target, model)
        return CommandResult(self.MESSAGE_SUCCESS.format(patient.name, patient.nric, patient.medical_report))


@dataclass(frozen=True)
class DeleteMedicalReportCommand(TargetedCommand):
    """Resets the four report fields to "None". Medicine usages are left alone."""

    COMMAND_WORD = "deletemr"
    MESSAGE_USAGE = _usage_for_targeted(COMMAND_WORD, "Deletes the medical report of a patient")
    MESSAGE_SUCCESS = "Medical report successfully deleted from {}"
    MESSAGE_NOTHING_TO_DELETE = "There is no medical report to delete for {}!"
    requires_confirmation = True

    def execute(self, model: Model) -> CommandResult:
        patient = resolve_target(self.target, model)
        if patient.medical_report.is_empty():
            return CommandResult(self.MESSAGE_NOTHING_TO_DELETE.format(self.target.describe()))
        model.set_medical_report(patient, patient.medical_report.with_fields(MedicalReport()))
        return CommandResult(self.MESSAGE_SUCCESS.format(self.target.describe()))


# ---------------------------------
# Medicine usage commands
# ---------------------------------


@dataclass(frozen=True)
class AddMedicineUsageCommand(TargetedCommand):
    medicine_usage: MedicineUsage

    COMMAND_WORD = "addmu"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a medicine usage to a patient identified by NRIC, OR by the index "
        "number used in the displayed patient list.\n"
        f"Parameters: ({PREFIX_NRIC}NRIC | INDEX) {PREFIX_MEDICINE_NAME}NAME {PREFIX_DOSAGE}DOSAGE "
        f"{PREFIX_START_DATE}YYYY-MM-DD {PREFIX_END_DATE}YYYY-MM-DD\n"
        f"Example: {COMMAND_WORD} {PREFIX_NRIC}S1234567A {PREFIX_MEDICINE_NAME}Paracetamol "
        f"{PREFIX_DOSAGE}2 tablets daily {PREFIX_START_DATE}2024-01-01 {PREFIX_END_DATE}2024-01-07"
    )
    MESSAGE_SUCCESS = "Medicine usage added to {}: {}"
    MESSAGE_DUPLICATE_USAGE = "This medicine usage is already recorded for {}"

    def execute(self, model: Model) -> CommandResult:
        patient = resolve_target(self.target, model)
        if self.medicine_usage in patient.medicine_usages:
            raise DuplicateMedicineUsageException(self.MESSAGE_DUPLICATE_USAGE.format(self.target.describe()))
        model.add_medicine_usage(patient, self.medicine_usage)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.target.describe(), self.medicine_usage))


@dataclass(frozen=True)
class ClearMedicineUsageCommand(TargetedCommand):
    """
    Clears every medicine usage of one patient. Reports "nothing to clear"
    without touching the model when the patient has none.
    """

    COMMAND_WORD = "clearmu"
    MESSAGE_USAGE = _usage_for_targeted(COMMAND_WORD, "Clears all medicine usages of a patient")

    MESSAGE_SUCCESS_MEDICINE_NRIC = "Medicine usage successfully deleted from {}"
    MESSAGE_SUCCESS_MEDICINE_ID = "Medicine usage successfully deleted from patient at index {}"
    MESSAGE_SUCCESS_MEDICINES_NRIC = "Medicine usages successfully deleted from {}"
    MESSAGE_SUCCESS_MEDICINES_ID = "Medicine usages successfully deleted from patient at index {}"
    MESSAGE_NO_MEDICINE_NRIC = "Patient with NRIC {} has no medicine usages to clear!"
    MESSAGE_NO_MEDICINE_ID = "Patient at index {} has no medicine usages to clear!"

    requires_confirmation = True

    def execute(self, model: Model) -> CommandResult:
        patient = resolve_target(self.target, model)

        medicine_count = len(patient.medicine_usages)
        if medicine_count == 0:
            return CommandResult(self._message(self.MESSAGE_NO_MEDICINE_NRIC, self.MESSAGE_NO_MEDICINE_ID))

        model.clear_medicine_usage(patient)
        if medicine_count == 1:
            return CommandResult(
                self._message(self.MESSAGE_SUCCESS_MEDICINE_NRIC, self.MESSAGE_SUCCESS_MEDICINE_ID)
            )
        return CommandResult(
            self._message(self.MESSAGE_SUCCESS_MEDICINES_NRIC, self.MESSAGE_SUCCESS_MEDICINES_ID)
        )

    def _message(self, by_nric: str, by_index: str) -> str:
        if isinstance(self.target, ByNric):
            return by_nric.format(self.target.nric)
        return by_index.format(self.target.index.one_based)


# ---------------------------------
# Session commands
# ---------------------------------


@dataclass(frozen=True)
class HelpCommand(Command):
    COMMAND_WORD = "help"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Shows the usage of every command."

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(help_text(), show_help=True)


@dataclass(frozen=True)
class ExitCommand(Command):
    COMMAND_WORD = "exit"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Exits MedBook."
    MESSAGE_EXIT_ACKNOWLEDGEMENT = "Exiting MedBook as requested ..."

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.MESSAGE_EXIT_ACKNOWLEDGEMENT, exit=True)


ALL_COMMANDS: tuple[type[Command], ...] = (
    AddCommand,
    DeleteCommand,
    ListCommand,
    FindCommand,
    ClearCommand,
    AddMedicalReportCommand,
    ViewMedicalReportCommand,
    DeleteMedicalReportCommand,
    AddMedicineUsageCommand,
    ClearMedicineUsageCommand,
    HelpCommand,
    ExitCommand,
)


def help_text() -> str:
    return "\n\n".join(command.MESSAGE_USAGE for command in ALL_COMMANDS)
