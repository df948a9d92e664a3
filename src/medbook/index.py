"""
Positional index into the displayed patient list.

An Index is a view reference, not a stable identifier: it is only meaningful
against the list that was on screen when the command was typed.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Index:
    zero_based: int

    def __post_init__(self):
        if isinstance(self.zero_based, bool) or not isinstance(self.zero_based, int):
            raise ValueError(f"Index must be an integer, got {type(self.zero_based).__name__}")
        if self.zero_based < 0:
            raise ValueError(f"Index cannot be negative: {self.zero_based}")

    @classmethod
    def from_zero_based(cls, zero_based: int) -> "Index":
        return cls(zero_based)

    @classmethod
    def from_one_based(cls, one_based: int) -> "Index":
        return cls(one_based - 1)

    @property
    def one_based(self) -> int:
        return self.zero_based + 1

    def __str__(self) -> str:
        return str(self.one_based)
