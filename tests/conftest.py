from datetime import date

import pytest

from medbook.model import ModelManager
from medbook.nric import Nric
from medbook.patient import MedicalReport, MedicineUsage, Patient


def make_usage(name: str = "Paracetamol", day: int = 1) -> MedicineUsage:
    return MedicineUsage(
        name=name,
        dosage="2 tablets daily",
        start_date=date(2024, 1, day),
        end_date=date(2024, 1, day + 6),
    )


@pytest.fixture
def usage_factory():
    """Builds a week-long MedicineUsage starting on the given day of January 2024."""
    return make_usage


@pytest.fixture
def alice() -> Patient:
    """Patient without medicine usages."""
    return Patient(name="Alice Pauline", nric=Nric("S1234567A"), phone="94351253")


@pytest.fixture
def benson() -> Patient:
    """Patient with exactly one medicine usage."""
    return Patient(
        name="Benson Meier",
        nric=Nric("T7654321B"),
        phone="98765432",
        medical_report=MedicalReport(allergy="Penicillin", medicine_usages=(make_usage(),)),
    )


@pytest.fixture
def carl() -> Patient:
    """Patient with three medicine usages."""
    return Patient(
        name="Carl Kurz",
        nric=Nric("F2345678C"),
        phone="95352563",
        medical_report=MedicalReport(
            illness="Asthma",
            medicine_usages=(
                make_usage("Salbutamol", 1),
                make_usage("Prednisolone", 2),
                make_usage("Montelukast", 3),
            ),
        ),
    )


@pytest.fixture
def model(alice, benson, carl) -> ModelManager:
    """Record book holding alice, benson and carl, in that order."""
    return ModelManager([alice, benson, carl])
