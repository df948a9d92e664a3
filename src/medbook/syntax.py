"""
Command-line syntax: the prefixes that introduce each argument.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Prefix:
    """A marker such as ``n/`` that introduces an argument value."""

    prefix: str

    def __str__(self) -> str:
        return self.prefix


PREFIX_NRIC = Prefix("n/")
PREFIX_NAME = Prefix("nm/")
PREFIX_PHONE = Prefix("p/")
PREFIX_ALLERGY = Prefix("al/")
PREFIX_ILLNESS = Prefix("ill/")
PREFIX_SURGERY = Prefix("sur/")
PREFIX_IMMUNIZATION = Prefix("imm/")
PREFIX_MEDICINE_NAME = Prefix("mn/")
PREFIX_DOSAGE = Prefix("dos/")
PREFIX_START_DATE = Prefix("from/")
PREFIX_END_DATE = Prefix("to/")
