"""
Prometheus Metrics — auto-link observability.

Exposes counters and a histogram for:
- Links inserted per run
- Protected regions by kind
- Inventory pages fetched / failed
- Session rejections (concurrent run, empty undo)
- Stage latency

Usage
-----
    from autolink.session.metrics import record_links_inserted, timed_stage

    with timed_stage("annotate"):
        result = engine.annotate(text, names)

    record_links_inserted(result.inserted_count)
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, Iterable

from prometheus_client import Counter, Histogram

from autolink.models.protected_region import ProtectedRegion

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Links inserted by the annotation engine.
LINKS_INSERTED: Counter = Counter(
    "autolink_links_inserted_total",
    "Total [[links]] inserted by the annotation engine",
)

# Regions shielded by the syntax masker, labelled by pattern kind.
PROTECTED_REGIONS: Counter = Counter(
    "autolink_protected_regions_total",
    "Protected regions captured by the syntax masker",
    ["kind"],
)

# Inventory pages successfully fetched.
INVENTORY_PAGES: Counter = Counter(
    "autolink_inventory_pages_total",
    "Name inventory pages fetched",
)

# Inventory pages that failed and truncated the retrieval loop.
INVENTORY_FAILURES: Counter = Counter(
    "autolink_inventory_failures_total",
    "Name inventory page fetches that failed",
)

# Session operations refused, labelled by reason.
SESSION_REJECTIONS: Counter = Counter(
    "autolink_session_rejections_total",
    "Auto-link or undo requests refused by the session",
    ["reason"],
)

# Processing latency per stage (seconds).
STAGE_LATENCY: Histogram = Histogram(
    "autolink_stage_seconds",
    "Processing time per auto-link stage in seconds",
    ["stage"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0, 30.0),
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_links_inserted(count: int) -> None:
    """Add *count* to the inserted-links counter."""
    if count > 0:
        LINKS_INSERTED.inc(count)


def record_protected_regions(regions: Iterable[ProtectedRegion]) -> None:
    for region in regions:
        PROTECTED_REGIONS.labels(kind=region.kind).inc()


def record_inventory_page() -> None:
    INVENTORY_PAGES.inc()


def record_inventory_failure() -> None:
    INVENTORY_FAILURES.inc()


def record_rejection(reason: str) -> None:
    """Increment the rejection counter for *reason*."""
    SESSION_REJECTIONS.labels(reason=reason).inc()


@contextmanager
def timed_stage(stage: str) -> Generator[None, None, None]:
    """
    Context manager that records stage processing latency.

    Usage::

        with timed_stage("fetch_names"):
            names = await fetch_all_names(provider)
    """
    with STAGE_LATENCY.labels(stage=stage).time():
        yield
