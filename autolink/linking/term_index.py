"""
Term Index — the matching order over the known name universe.

Longer names are tried first so that "Paris Commune" claims its span before
"Paris" is ever considered at the same position.
"""
from typing import Iterable, List

from autolink.config.constants import NAMESPACE_SEPARATOR


class TermIndex:
    """Known names ordered by descending length."""

    def __init__(self, names: Iterable[str]):
        self._names: List[str] = list(names)

    def __len__(self) -> int:
        return len(self._names)

    def ordered(self) -> List[str]:
        """
        Return linkable names, longest first.

        Ties keep the iteration order of the input collection (the sort is
        stable). Empty names and names carrying a namespace prefix are dropped.
        """
        eligible = [n for n in self._names if n and NAMESPACE_SEPARATOR not in n]
        return sorted(eligible, key=len, reverse=True)
