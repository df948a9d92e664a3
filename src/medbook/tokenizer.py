"""
Argument tokenizer.

Splits the text after a command word into a preamble and prefixed values, e.g.

    " 1 mn/Panadol dos/2 tablets"  ->  preamble "1",
                                       mn/ -> ["Panadol"], dos/ -> ["2 tablets"]

A prefix only counts when it starts the string or follows whitespace, so
``mn/`` never also matches as ``n/``.
"""

import re
from collections import defaultdict
from typing import Iterable

from .exceptions import DuplicatePrefixException
from .syntax import Prefix


class ArgumentMultimap:
    """Prefix -> list of values, in the order they appeared, plus the preamble."""

    def __init__(self, preamble: str = ""):
        self._preamble = preamble
        self._values: dict[Prefix, list[str]] = defaultdict(list)

    def put(self, prefix: Prefix, value: str) -> None:
        self._values[prefix].append(value)

    @property
    def preamble(self) -> str:
        return self._preamble

    def get_value(self, prefix: Prefix) -> str | None:
        """Last value given for `prefix`, or None if it is absent."""
        values = self._values.get(prefix)
        return values[-1] if values else None

    def get_all_values(self, prefix: Prefix) -> list[str]:
        return list(self._values.get(prefix, []))

    def is_present(self, *prefixes: Prefix) -> bool:
        return all(self.get_value(prefix) is not None for prefix in prefixes)

    def verify_no_duplicate_prefixes_for(self, *prefixes: Prefix) -> None:
        duplicated = [prefix for prefix in prefixes if len(self._values.get(prefix, [])) > 1]
        if duplicated:
            raise DuplicatePrefixException(duplicated)


class ArgumentTokenizer:
    @staticmethod
    def tokenize(args: str, *prefixes: Prefix) -> ArgumentMultimap:
        positions = ArgumentTokenizer._find_prefix_positions(args, prefixes)
        if not positions:
            return ArgumentMultimap(args.strip())

        multimap = ArgumentMultimap(args[: positions[0][0]].strip())
        for i, (start, prefix) in enumerate(positions):
            end = positions[i + 1][0] if i + 1 < len(positions) else len(args)
            multimap.put(prefix, args[start + len(prefix.prefix): end].strip())
        return multimap

    @staticmethod
    def _find_prefix_positions(
        args: str, prefixes: Iterable[Prefix]
    ) -> list[tuple[int, Prefix]]:
        found: list[tuple[int, Prefix]] = []
        for prefix in prefixes:
            pattern = re.compile(r"(?:^|(?<=\s))" + re.escape(prefix.prefix))
            found.extend((m.start(), prefix) for m in pattern.finditer(args))
        found.sort(key=lambda item: item[0])
        return found
