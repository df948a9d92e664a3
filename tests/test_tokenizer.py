import pytest

from medbook.exceptions import DuplicatePrefixException
from medbook.syntax import PREFIX_ALLERGY, PREFIX_ILLNESS, PREFIX_MEDICINE_NAME, PREFIX_NRIC
from medbook.tokenizer import ArgumentTokenizer


def test_no_prefixes_everything_is_preamble():
    argmap = ArgumentTokenizer.tokenize("  some text  ", PREFIX_NRIC)
    assert argmap.preamble == "some text"
    assert argmap.get_value(PREFIX_NRIC) is None


def test_values_are_trimmed_and_split_at_next_prefix():
    argmap = ArgumentTokenizer.tokenize(" n/S1234567A  al/Peanuts, dust ill/Flu ", PREFIX_NRIC, PREFIX_ALLERGY, PREFIX_ILLNESS)
    assert argmap.preamble == ""
    assert argmap.get_value(PREFIX_NRIC) == "S1234567A"
    assert argmap.get_value(PREFIX_ALLERGY) == "Peanuts, dust"
    assert argmap.get_value(PREFIX_ILLNESS) == "Flu"


def test_prefix_at_start_of_string_is_recognised():
    argmap = ArgumentTokenizer.tokenize("n/S1234567A", PREFIX_NRIC)
    assert argmap.preamble == ""
    assert argmap.get_value(PREFIX_NRIC) == "S1234567A"


def test_preamble_before_first_prefix():
    argmap = ArgumentTokenizer.tokenize(" 2 mn/Panadol", PREFIX_NRIC, PREFIX_MEDICINE_NAME)
    assert argmap.preamble == "2"
    assert argmap.get_value(PREFIX_MEDICINE_NAME) == "Panadol"
    assert argmap.get_value(PREFIX_NRIC) is None


def test_prefix_inside_a_word_is_not_a_prefix():
    """'mn/' must not also be read as 'n/', and 'xn/' is just text."""
    argmap = ArgumentTokenizer.tokenize(" mn/Panadol al/xn/abc", PREFIX_NRIC, PREFIX_MEDICINE_NAME, PREFIX_ALLERGY)
    assert argmap.get_value(PREFIX_NRIC) is None
    assert argmap.get_value(PREFIX_MEDICINE_NAME) == "Panadol"
    assert argmap.get_value(PREFIX_ALLERGY) == "xn/abc"


def test_repeated_prefix_keeps_all_values_and_last_wins():
    argmap = ArgumentTokenizer.tokenize(" al/Dust al/Pollen", PREFIX_ALLERGY)
    assert argmap.get_all_values(PREFIX_ALLERGY) == ["Dust", "Pollen"]
    assert argmap.get_value(PREFIX_ALLERGY) == "Pollen"


def test_empty_value_is_present_but_blank():
    argmap = ArgumentTokenizer.tokenize(" n/S1234567A al/", PREFIX_NRIC, PREFIX_ALLERGY)
    assert argmap.get_value(PREFIX_ALLERGY) == ""
    assert argmap.is_present(PREFIX_NRIC, PREFIX_ALLERGY)


def test_verify_no_duplicates_lists_every_duplicate():
    argmap = ArgumentTokenizer.tokenize(" n/S1234567A n/T7654321B al/a al/b ill/c", PREFIX_NRIC, PREFIX_ALLERGY, PREFIX_ILLNESS)
    with pytest.raises(DuplicatePrefixException) as excinfo:
        argmap.verify_no_duplicate_prefixes_for(PREFIX_NRIC, PREFIX_ALLERGY, PREFIX_ILLNESS)
    assert excinfo.value.prefixes == (PREFIX_NRIC, PREFIX_ALLERGY)
    assert "n/ al/" in str(excinfo.value)


def test_verify_no_duplicates_passes_for_single_values():
    argmap = ArgumentTokenizer.tokenize(" n/S1234567A al/a", PREFIX_NRIC, PREFIX_ALLERGY)
    argmap.verify_no_duplicate_prefixes_for(PREFIX_NRIC, PREFIX_ALLERGY, PREFIX_ILLNESS)
