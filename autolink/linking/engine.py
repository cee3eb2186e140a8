"""
Annotation Engine — orchestrates Masker → Scheduler → Masker-restore.

Pipeline:
    1. Protect existing syntax (links, templates, tags, URLs, magic words)
    2. Order the known names (longest first, no namespaced titles)
    3. Schedule and wrap non-overlapping matches (nothing after a dangling "[[")
    4. Restore the protected syntax

Output depends only on the inputs. Running it on its own output adds nothing,
because every link it produced is protected on the next pass.
"""
import logging
from typing import Iterable, List, Optional

from autolink.config.constants import LINK_CLOSE, LINK_OPEN, PLACEHOLDER_PATTERN
from autolink.linking.masker import SyntaxMasker, syntax_masker
from autolink.linking.scheduler import schedule_matches
from autolink.linking.term_index import TermIndex
from autolink.models.annotation_result import AnnotationResult
from autolink.models.span import Span
from autolink.session.metrics import record_protected_regions

logger = logging.getLogger(__name__)


class AnnotationEngine:
    """Inserts [[Name]] links around known names in wiki text."""

    def __init__(self, masker: Optional[SyntaxMasker] = None):
        self.masker = masker if masker is not None else syntax_masker

    def annotate(self, text: str, names: Iterable[str]) -> AnnotationResult:
        """
        Link every unprotected occurrence of a known name.

        Args:
            text: Raw wiki text.
            names: Known page titles.

        Returns:
            AnnotationResult with the final text and the insertion count.
        """
        # 1. Protect
        masked_text, regions = self.masker.protect(text)
        record_protected_regions(regions)

        # 2. Order
        index = TermIndex(names)
        ordered_names = index.ordered()

        # 3. Schedule against placeholder positions and any dangling "[["
        blocked = placeholder_spans(masked_text)
        opener = dangling_link_opener(text)
        if opener is not None:
            tail_start = self.masker.masked_offset(masked_text, regions, opener)
            blocked = [s for s in blocked if s.end <= tail_start]
            if tail_start < len(masked_text):
                blocked.append(Span(tail_start, len(masked_text), LINK_OPEN))

        annotated, inserted_count, claimed = schedule_matches(
            masked_text, ordered_names, blocked=blocked
        )

        # 4. Restore
        final_text = self.masker.restore(annotated, regions)

        logger.debug(
            "Annotated text: %d links inserted, %d regions protected, %d of %d names eligible",
            inserted_count, len(regions), len(ordered_names), len(index),
        )
        return AnnotationResult(
            text=final_text,
            inserted_count=inserted_count,
            spans=tuple(claimed),
            protected_count=len(regions),
        )


def placeholder_spans(masked_text: str) -> List[Span]:
    """Positions of every placeholder token in *masked_text*."""
    return [
        Span(m.start(), m.end(), m.group(0))
        for m in PLACEHOLDER_PATTERN.finditer(masked_text)
    ]


def dangling_link_opener(text: str) -> Optional[int]:
    """
    Offset of the leftmost "[[" with no "]]" anywhere after it, or None.

    Any link inserted after such an opener would close it on the next pass,
    so nothing past it may be linked.
    """
    last_close = text.rfind(LINK_CLOSE)
    search_from = last_close + len(LINK_CLOSE) if last_close >= 0 else 0
    opener = text.find(LINK_OPEN, search_from)
    return opener if opener >= 0 else None


# Module-level default engine instance
annotation_engine = AnnotationEngine()


def annotate(text: str, names: Iterable[str]) -> AnnotationResult:
    """Annotate *text* with the default engine."""
    return annotation_engine.annotate(text, names)
