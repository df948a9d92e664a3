"""
NRIC domain model.

Defines the Nric value object used as the canonical patient identifier.
"""

import re
from dataclasses import dataclass

# Prefix letter, seven digits, checksum letter (e.g. S1234567A)
_NRIC_PATTERN = re.compile(r"^[STFGM][0-9]{7}[A-Z]$")

MESSAGE_CONSTRAINTS = (
    "NRIC should start with S, T, F, G or M, followed by 7 digits "
    "and end with an uppercase letter (e.g. S1234567A)."
)


@dataclass(frozen=True)
class Nric:
    """
    A validated NRIC.

    Attributes:
        value: Upper-case NRIC string, e.g. "S1234567A".
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _NRIC_PATTERN.fullmatch(self.value):
            raise ValueError(f"Invalid NRIC: {self.value!r}. {MESSAGE_CONSTRAINTS}")

    @staticmethod
    def is_valid(value: str) -> bool:
        return isinstance(value, str) and bool(_NRIC_PATTERN.fullmatch(value))

    def __str__(self) -> str:
        return self.value
