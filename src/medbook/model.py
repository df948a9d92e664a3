"""
In-memory patient model.

`Model` is the context object every command receives in `execute`. It owns the
full patient collection and the displayed (filtered) view that index-based
commands resolve against. `ModelManager` is the default implementation.
"""

import abc
import logging
import typing

from .nric import Nric
from .patient import MedicalReport, MedicineUsage, Patient

LOGGER = logging.getLogger(__name__)

PatientPredicate = typing.Callable[[Patient], bool]


def SHOW_ALL_PATIENTS(patient: Patient) -> bool:
    return True


class DuplicatePatientError(ValueError):
    """Raised when a second patient with an existing NRIC is stored."""


class PatientNotFoundError(ValueError):
    """Raised when an operation names a patient the model does not hold."""


class Model(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def find_patient_by_nric(self, nric: Nric) -> Patient | None:
        raise NotImplementedError

    @abc.abstractmethod
    def has_patient(self, patient: Patient) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def add_patient(self, patient: Patient) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def delete_patient(self, patient: Patient) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def set_patient(self, target: Patient, edited: Patient) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def clear_patients(self) -> None:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def filtered_patient_list(self) -> typing.Sequence[Patient]:
        # the displayed view; positions are what Index refers to
        raise NotImplementedError

    @abc.abstractmethod
    def update_filtered_patient_list(self, predicate: PatientPredicate) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def clear_medicine_usage(self, patient: Patient) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def add_medicine_usage(self, patient: Patient, usage: MedicineUsage) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def set_medical_report(self, patient: Patient, report: MedicalReport) -> None:
        raise NotImplementedError


class ModelManager(Model):
    """
    Keeps patients in insertion order. Replacing a patient keeps its position,
    so the displayed list does not reshuffle after an edit.
    """

    def __init__(self, patients: typing.Iterable[Patient] = ()):
        self._patients: list[Patient] = []
        self._predicate: PatientPredicate = SHOW_ALL_PATIENTS
        for patient in patients:
            self.add_patient(patient)

    @property
    def patients(self) -> tuple[Patient, ...]:
        """Every stored patient, regardless of the current filter."""
        return tuple(self._patients)

    def find_patient_by_nric(self, nric: Nric) -> Patient | None:
        for patient in self._patients:
            if patient.nric == nric:
                return patient
        return None

    def has_patient(self, patient: Patient) -> bool:
        return any(existing.is_same_patient(patient) for existing in self._patients)

    def add_patient(self, patient: Patient) -> None:
        if self.has_patient(patient):
            raise DuplicatePatientError(f"Patient with NRIC {patient.nric} already exists")
        self._patients.append(patient)
        LOGGER.debug(f"Added patient {patient.nric}")

    def delete_patient(self, patient: Patient) -> None:
        position = self._position_of(patient)
        del self._patients[position]
        LOGGER.debug(f"Deleted patient {patient.nric}")

    def set_patient(self, target: Patient, edited: Patient) -> None:
        position = self._position_of(target)
        if not target.is_same_patient(edited) and self.has_patient(edited):
            raise DuplicatePatientError(f"Patient with NRIC {edited.nric} already exists")
        self._patients[position] = edited

    def clear_patients(self) -> None:
        self._patients.clear()
        LOGGER.debug("Cleared all patients")

    @property
    def filtered_patient_list(self) -> tuple[Patient, ...]:
        return tuple(patient for patient in self._patients if self._predicate(patient))

    def update_filtered_patient_list(self, predicate: PatientPredicate) -> None:
        self._predicate = predicate

    def clear_medicine_usage(self, patient: Patient) -> None:
        current = self._patients[self._position_of(patient)]
        report = current.medical_report.without_medicine_usages()
        self.set_patient(current, current.with_medical_report(report))
        LOGGER.debug(f"Cleared medicine usages of {patient.nric}")

    def add_medicine_usage(self, patient: Patient, usage: MedicineUsage) -> None:
        current = self._patients[self._position_of(patient)]
        report = current.medical_report.with_medicine_usage(usage)
        self.set_patient(current, current.with_medical_report(report))
        LOGGER.debug(f"Added medicine usage {usage.name!r} to {patient.nric}")

    def set_medical_report(self, patient: Patient, report: MedicalReport) -> None:
        current = self._patients[self._position_of(patient)]
        self.set_patient(current, current.with_medical_report(report))
        LOGGER.debug(f"Replaced medical report of {patient.nric}")

    def _position_of(self, patient: Patient) -> int:
        for position, existing in enumerate(self._patients):
            if existing.is_same_patient(patient):
                return position
        raise PatientNotFoundError(f"Patient with NRIC {patient.nric} is not in the model")
