"""
User-facing messages shared by several commands.
"""

from typing import Iterable

from .patient import Patient

MESSAGE_INVALID_PATIENT_DISPLAYED_INDEX = "The patient index provided is invalid"
MESSAGE_PATIENTS_LISTED_OVERVIEW = "{} patients listed!"
MESSAGE_PERSON_NOT_FOUND_NRIC = "Patient with NRIC {} not found"
MESSAGE_PERSON_NOT_FOUND_ID = "Patient at index {} not found"
MESSAGE_CANCELLED = "Command cancelled."


def format_patient_list(patients: Iterable[Patient]) -> str:
    """Numbered listing of patients, 1-based to match index targeting."""
    return "\n".join(f"{i}. {patient}" for i, patient in enumerate(patients, start=1))
