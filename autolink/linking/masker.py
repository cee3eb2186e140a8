"""
Syntax Masker — shields existing wiki markup from the link scheduler.

Each protection pattern is an independent global sweep over the output of the
previous sweep. Every match is recorded as a ProtectedRegion and replaced by
an inert ``__PROTECTED_<i>__`` placeholder. Restoration looks placeholders up
by the index they encode, so restored content is never searched again.
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

from autolink.config.constants import PLACEHOLDER_PATTERN
from autolink.models.protected_region import ProtectedRegion

logger = logging.getLogger(__name__)

LITERAL_KIND = "placeholder_literal"


class SyntaxMasker:
    """
    Reversible masking of protected wiki syntax.

    Sweep order (later sweeps only see placeholders for earlier matches):
        0. literal placeholder look-alikes already in the input
        1. existing links        [[...]]
        2. templates             {{...}}
        3. paired tags with body <x>...</x>
        4. self-closing tags     <x/>
        5. bare external URLs    http(s)://...
        6. magic words           __NOTOC__
    """

    def __init__(self, patterns: Optional[List[dict]] = None):
        if patterns is None:
            patterns = DEFAULT_PROTECTION_PATTERNS
        self.patterns: List[Tuple[str, re.Pattern]] = [
            (entry["kind"], _compile_sweep(entry))
            for entry in patterns
        ]

    def protect(self, text: str) -> Tuple[str, List[ProtectedRegion]]:
        """
        Replace every protected region with a placeholder.

        Args:
            text: Raw wiki text.

        Returns:
            (masked_text, regions) with regions in index order.
        """
        regions: List[ProtectedRegion] = []

        for kind, compiled in self.patterns:

            def _capture(match: re.Match, kind: str = kind) -> str:
                # An earlier placeholder hit by the guard alternative stays as is
                if match.group("placeholder") is not None:
                    return match.group(0)
                region = ProtectedRegion(index=len(regions), kind=kind, text=match.group(0))
                regions.append(region)
                return region.placeholder

            text = compiled.sub(_capture, text)

        if regions:
            logger.debug("Protected %d regions", len(regions))
        return text, regions

    def restore(self, text: str, regions: List[ProtectedRegion]) -> str:
        """
        Put every protected region back in place of its placeholder.

        A region captured by a later sweep may itself contain placeholders of
        earlier regions (a template wrapping a link), so region texts are
        expanded in index order before the final substitution. Literal
        look-alikes are kept verbatim.
        """
        if not regions:
            return text
        return _substitute(text, _resolve(regions))

    def masked_offset(self, masked_text: str, regions: List[ProtectedRegion], offset: int) -> int:
        """
        Translate an offset in the unmasked text into *masked_text* coordinates.

        An offset that falls inside a protected region maps to the start of
        that region's placeholder.
        """
        resolved = _resolve(regions)
        shift = 0
        for match in PLACEHOLDER_PATTERN.finditer(masked_text):
            original_start = match.start() + shift
            if offset < original_start:
                break
            expanded = resolved.get(int(match.group(1)), match.group(0))
            if offset < original_start + len(expanded):
                return match.start()
            shift += len(expanded) - len(match.group(0))
        return offset - shift


def _compile_sweep(entry: dict) -> re.Pattern:
    """
    Compile one sweep.

    Every sweep except the literal one carries a leading placeholder
    alternative so a pattern can never start inside an existing placeholder
    (``__PROTECTED_0__ABC__`` must not yield a ``__ABC__`` magic word).
    """
    flags = entry.get("flags", 0)
    if entry["kind"] == LITERAL_KIND:
        return re.compile(f"(?P<placeholder>(?!))|{entry['pattern']}", flags)
    return re.compile(
        f"(?P<placeholder>{PLACEHOLDER_PATTERN.pattern})|(?:{entry['pattern']})",
        flags,
    )


def _resolve(regions: List[ProtectedRegion]) -> Dict[int, str]:
    """Fully expanded text of every region, keyed by index."""
    resolved: Dict[int, str] = {}
    for region in regions:
        if region.kind == LITERAL_KIND:
            resolved[region.index] = region.text
        else:
            resolved[region.index] = _substitute(region.text, resolved)
    return resolved


def _substitute(text: str, resolved: Dict[int, str]) -> str:
    def _lookup(match: re.Match) -> str:
        return resolved.get(int(match.group(1)), match.group(0))

    return PLACEHOLDER_PATTERN.sub(_lookup, text)


# ==========================================================================
# Default protection patterns for MediaWiki markup
# ==========================================================================
DEFAULT_PROTECTION_PATTERNS: List[dict] = [
    {"kind": LITERAL_KIND, "pattern": PLACEHOLDER_PATTERN.pattern},
    {"kind": "link", "pattern": r"\[\[.*?\]\]", "flags": re.DOTALL},
    {"kind": "template", "pattern": r"\{\{.*?\}\}", "flags": re.DOTALL},
    {"kind": "paired_tag", "pattern": r"<.*?>.*?</.*?>", "flags": re.DOTALL},
    {"kind": "self_closing_tag", "pattern": r"<.*?/>"},
    {"kind": "external_url", "pattern": r"https?://[^\s]+"},
    {"kind": "reserved_token", "pattern": r"__[A-Z]+__(?!PROTECTED_\d+__)"},
]


# Module-level default masker instance
syntax_masker = SyntaxMasker()
