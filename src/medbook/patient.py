"""
Patient domain model.

Defines the Patient record together with the value objects it owns:
the MedicalReport (four free-text categories plus medicine usages) and
individual MedicineUsage entries.

All three are frozen dataclasses. Updates never mutate a record in place;
the ``with_*`` helpers return a replacement that the model swaps in.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import date

from .nric import Nric

# Placeholder for a report field the user has not filled in
NO_ENTRY = "None"

# Patterns
_FIELD_CHARACTERS = re.compile(r"^[a-zA-Z0-9 ,\-]+$")
_HAS_LETTER = re.compile(r"[a-zA-Z]")
_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z '\-.]*$")
_PHONE_PATTERN = re.compile(r"^[0-9]{3,}$")

FIELD_CONSTRAINTS = (
    "Invalid input! fields must contain only letters, numbers, spaces, commas, hyphens."
)


def is_valid_field(value: str) -> bool:
    """
    Returns True if the free-text field is non-blank, uses only letters, digits,
    spaces, commas and hyphens, and contains at least one letter.
    """
    if not isinstance(value, str):
        return False
    trimmed = value.strip()
    return (
        bool(trimmed)
        and bool(_FIELD_CHARACTERS.match(trimmed))
        and bool(_HAS_LETTER.search(trimmed))
    )


@dataclass(frozen=True)
class MedicineUsage:
    """
    One medicine administered to, or tracked for, a patient.

    Attributes:
        name: Medicine name (free-text field rule).
        dosage: Dosage description, e.g. "2 tablets daily".
        start_date: First day of the course.
        end_date: Last day of the course (not before start_date).
    """

    name: str
    dosage: str
    start_date: date
    end_date: date

    def __post_init__(self):
        if not is_valid_field(self.name):
            raise ValueError(f"Invalid medicine name: {self.name!r}")
        if not isinstance(self.dosage, str) or not self.dosage.strip():
            raise ValueError("Dosage must not be blank")
        if not isinstance(self.start_date, date) or not isinstance(self.end_date, date):
            raise ValueError("Medicine usage dates must be dates")
        if self.end_date < self.start_date:
            raise ValueError(
                f"End date {self.end_date.isoformat()} is before start date {self.start_date.isoformat()}"
            )

    def __str__(self) -> str:
        return (
            f"{self.name} ({self.dosage}) from {self.start_date.isoformat()} "
            f"to {self.end_date.isoformat()}"
        )


@dataclass(frozen=True)
class MedicalReport:
    """
    Four categorical free-text fields plus the patient's medicine usages.
    Unset categories hold the literal "None".
    """

    allergy: str = NO_ENTRY
    illness: str = NO_ENTRY
    surgery: str = NO_ENTRY
    immunization: str = NO_ENTRY
    medicine_usages: tuple[MedicineUsage, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for label in ("allergy", "illness", "surgery", "immunization"):
            value = getattr(self, label)
            if not is_valid_field(value):
                raise ValueError(f"Invalid {label}: {value!r}. {FIELD_CONSTRAINTS}")
            object.__setattr__(self, label, value.strip())
        # callers may hand in a list
        object.__setattr__(self, "medicine_usages", tuple(self.medicine_usages))

    def is_empty(self) -> bool:
        """True if no category has been filled in."""
        return all(
            value == NO_ENTRY
            for value in (self.allergy, self.illness, self.surgery, self.immunization)
        )

    def with_fields(self, other: "MedicalReport") -> "MedicalReport":
        # take the four categories from other, keep our medicine usages
        return replace(
            other,
            medicine_usages=self.medicine_usages,
        )

    def with_medicine_usage(self, usage: MedicineUsage) -> "MedicalReport":
        return replace(self, medicine_usages=self.medicine_usages + (usage,))

    def without_medicine_usages(self) -> "MedicalReport":
        return replace(self, medicine_usages=())

    def __str__(self) -> str:
        lines = [
            f"Allergy: {self.allergy}",
            f"Illness: {self.illness}",
            f"Surgery: {self.surgery}",
            f"Immunization: {self.immunization}",
        ]
        if self.medicine_usages:
            lines.append("Medicine usages:")
            lines.extend(
                f"  {i}. {usage}" for i, usage in enumerate(self.medicine_usages, start=1)
            )
        else:
            lines.append("Medicine usages: None")
        return "\n".join(lines)


@dataclass(frozen=True)
class Patient:
    """
    A patient in the record book.

    Attributes:
        name: Full name (letters, spaces, apostrophes, hyphens, periods).
        nric: Unique identifier; two patients with the same NRIC are the same patient.
        phone: Contact number, digits only.
        medical_report: The patient's MedicalReport.
    """

    name: str
    nric: Nric
    phone: str
    medical_report: MedicalReport = field(default_factory=MedicalReport)

    def __post_init__(self):
        if not isinstance(self.name, str) or not _NAME_PATTERN.match(self.name.strip()):
            raise ValueError(f"Invalid name: {self.name!r}")
        if not isinstance(self.nric, Nric):
            raise ValueError(f"nric must be an Nric, got {type(self.nric).__name__}")
        if not isinstance(self.phone, str) or not _PHONE_PATTERN.match(self.phone):
            raise ValueError(f"Invalid phone number: {self.phone!r}")

    @property
    def medicine_usages(self) -> tuple[MedicineUsage, ...]:
        return self.medical_report.medicine_usages

    def is_same_patient(self, other: "Patient") -> bool:
        return other is not None and other.nric == self.nric

    def with_medical_report(self, report: MedicalReport) -> "Patient":
        return replace(self, medical_report=report)

    def __str__(self) -> str:
        return f"{self.name}; NRIC: {self.nric}; Phone: {self.phone}"
