"""
ClearMedicineUsageCommand:
- 0 / 1 / many usages, by NRIC and by index
- lookup failures leave the model untouched
- equality depends on targeting mode and value
"""

import pytest

from medbook.commands import ByIndex, ByNric, ClearMedicineUsageCommand
from medbook.exceptions import InvalidDisplayedIndexException, PersonNotFoundException
from medbook.index import Index
from medbook.model import ModelManager
from medbook.nric import Nric


def by_nric(value: str) -> ClearMedicineUsageCommand:
    return ClearMedicineUsageCommand(ByNric(Nric(value)))


def by_index(one_based: int) -> ClearMedicineUsageCommand:
    return ClearMedicineUsageCommand(ByIndex(Index.from_one_based(one_based)))


def test_many_usages_by_nric(model, carl):
    result = by_nric(str(carl.nric)).execute(model)
    assert result.feedback_to_user == "Medicine usages successfully deleted from F2345678C"
    assert model.find_patient_by_nric(carl.nric).medicine_usages == ()


def test_one_usage_by_nric(model, benson):
    result = by_nric(str(benson.nric)).execute(model)
    assert result.feedback_to_user == "Medicine usage successfully deleted from T7654321B"
    assert model.find_patient_by_nric(benson.nric).medicine_usages == ()


def test_no_usages_by_nric_leaves_model_unchanged(model, alice):
    before = model.patients
    result = by_nric(str(alice.nric)).execute(model)
    assert result.feedback_to_user == "Patient with NRIC S1234567A has no medicine usages to clear!"
    assert model.patients == before


def test_no_usages_by_index(model):
    before = model.patients
    result = by_index(1).execute(model)
    assert result.feedback_to_user == "Patient at index 1 has no medicine usages to clear!"
    assert model.patients == before


def test_one_usage_by_index(model, benson):
    result = by_index(2).execute(model)
    assert result.feedback_to_user == "Medicine usage successfully deleted from patient at index 2"
    assert model.find_patient_by_nric(benson.nric).medicine_usages == ()


def test_many_usages_by_index(model, carl):
    result = by_index(3).execute(model)
    assert result.feedback_to_user == "Medicine usages successfully deleted from patient at index 3"
    assert model.find_patient_by_nric(carl.nric).medicine_usages == ()


def test_three_usages_on_first_patient_by_nric(alice, carl, usage_factory):
    """clearmu n/S1234567A on a patient with 3 usages."""
    report = alice.medical_report
    for day in (1, 2, 3):
        report = report.with_medicine_usage(usage_factory(f"Drug {chr(64 + day)}", day))
    model = ModelManager([alice.with_medical_report(report), carl])

    result = by_nric("S1234567A").execute(model)

    assert result.feedback_to_user == "Medicine usages successfully deleted from S1234567A"
    assert model.find_patient_by_nric(Nric("S1234567A")).medicine_usages == ()


def test_other_report_fields_survive(model, benson):
    by_nric(str(benson.nric)).execute(model)
    assert model.find_patient_by_nric(benson.nric).medical_report.allergy == "Penicillin"


def test_index_counts_in_displayed_list(model, carl):
    """Index 1 refers to the first *displayed* patient, not the first stored one."""
    model.update_filtered_patient_list(lambda p: p.nric == carl.nric)
    result = by_index(1).execute(model)
    assert result.feedback_to_user == "Medicine usages successfully deleted from patient at index 1"
    assert model.find_patient_by_nric(carl.nric).medicine_usages == ()


@pytest.mark.parametrize("one_based", [4, 100])
def test_index_out_of_bounds(model, one_based):
    before = model.patients
    with pytest.raises(InvalidDisplayedIndexException):
        by_index(one_based).execute(model)
    assert model.patients == before


def test_index_out_of_bounds_in_filtered_list(model, alice):
    model.update_filtered_patient_list(lambda p: p.nric == alice.nric)
    with pytest.raises(InvalidDisplayedIndexException):
        by_index(2).execute(model)


def test_unknown_nric(model):
    before = model.patients
    with pytest.raises(PersonNotFoundException) as excinfo:
        by_nric("G0000000Z").execute(model)
    assert str(excinfo.value) == "Patient with NRIC G0000000Z not found"
    assert model.patients == before


class _ViewWithHole(ModelManager):
    @property
    def filtered_patient_list(self):
        return (None,)


def test_missing_patient_at_index():
    with pytest.raises(PersonNotFoundException) as excinfo:
        by_index(1).execute(_ViewWithHole())
    assert str(excinfo.value) == "Patient at index 1 not found"


def test_requires_confirmation():
    assert by_nric("S1234567A").requires_confirmation
    assert by_index(1).requires_confirmation


def test_equality():
    assert by_nric("S1234567A") == by_nric("S1234567A")
    assert by_index(1) == by_index(1)
    assert by_nric("S1234567A") != by_nric("T7654321B")
    assert by_index(1) != by_index(2)
    # same patient reachable both ways is still a different command
    assert by_nric("S1234567A") != by_index(1)
    assert by_index(1) != by_nric("S1234567A")
    assert by_nric("S1234567A") != "clearmu n/S1234567A"
    assert by_nric("S1234567A") is not None


@pytest.mark.parametrize("target", [None, Nric("S1234567A"), Index.from_one_based(1), "1"])
def test_target_must_be_nric_or_index(target):
    with pytest.raises(ValueError):
        ClearMedicineUsageCommand(target)


def test_check_reports_lookup_errors_without_clearing(model, carl):
    by_nric("F2345678C").check(model)
    with pytest.raises(InvalidDisplayedIndexException):
        by_index(4).check(model)
    with pytest.raises(PersonNotFoundException):
        by_nric("G0000000Z").check(model)
    assert model.find_patient_by_nric(carl.nric) == carl
