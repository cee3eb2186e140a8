"""
Match Scheduler — greedy, longest-first interval scheduling of name matches.

Rules:
1. Names are tried in TermIndex order (longest first)
2. Within one name, occurrences are considered rightmost first
3. An occurrence is accepted only if it intersects neither an already
   claimed span nor a blocked span (placeholder positions)

First-claimed wins. This is not a maximum-coverage solver: a rare multi-way
overlap can leave text unlinked that a smarter assignment would cover.
"""
import logging
import re
from bisect import bisect_right
from typing import Iterable, List, Sequence, Tuple

from autolink.config.constants import LINK_CLOSE, LINK_OPEN
from autolink.models.span import Span

logger = logging.getLogger(__name__)


class SpanSet:
    """
    Disjoint spans kept sorted by start.

    Because members never overlap each other, a candidate can only collide
    with its two neighbours in start order.
    """

    def __init__(self, spans: Iterable[Span] = ()):
        self._spans: List[Span] = sorted(spans, key=lambda s: s.start)
        self._starts: List[int] = [s.start for s in self._spans]

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self):
        return iter(self._spans)

    def overlaps(self, span: Span) -> bool:
        i = bisect_right(self._starts, span.start)
        if i > 0 and self._spans[i - 1].overlaps(span):
            return True
        return i < len(self._spans) and self._spans[i].overlaps(span)

    def add(self, span: Span) -> None:
        i = bisect_right(self._starts, span.start)
        self._starts.insert(i, span.start)
        self._spans.insert(i, span)


def find_occurrences(text: str, name: str) -> List[Span]:
    """Return every non-overlapping literal occurrence of *name* in *text*."""
    pattern = re.compile(re.escape(name))
    return [Span(m.start(), m.end(), name) for m in pattern.finditer(text)]


def schedule_matches(
    masked_text: str,
    ordered_names: Sequence[str],
    blocked: Sequence[Span] = (),
) -> Tuple[str, int, List[Span]]:
    """
    Claim non-overlapping occurrences of *ordered_names* and wrap them in links.

    Args:
        masked_text: Text whose protected regions are already placeholders.
        ordered_names: Names in matching priority order (see TermIndex).
        blocked: Disjoint spans that may never be linked, e.g. placeholder
            positions.

    Returns:
        (annotated_text, inserted_count, claimed spans sorted by start).
        Span offsets refer to *masked_text*, not to the annotated output.
    """
    forbidden = SpanSet(blocked)
    claimed = SpanSet()

    for name in ordered_names:
        if name not in masked_text:
            continue
        occurrences = find_occurrences(masked_text, name)

        for span in reversed(occurrences):
            if forbidden.overlaps(span) or claimed.overlaps(span):
                continue
            claimed.add(span)

    accepted = list(claimed)
    return _render(masked_text, accepted), len(claimed), accepted


def _render(masked_text: str, claimed: List[Span]) -> str:
    """Copy the gaps between claimed spans and wrap each span in brackets."""
    parts: List[str] = []
    cursor = 0
    for span in claimed:
        parts.append(masked_text[cursor:span.start])
        parts.append(f"{LINK_OPEN}{span.name}{LINK_CLOSE}")
        cursor = span.end
    parts.append(masked_text[cursor:])
    return "".join(parts)
