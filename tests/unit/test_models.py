"""
Unit tests for the data models and JSON schemas.
"""
from __future__ import annotations

import pytest
from jsonschema import ValidationError, validate

from autolink.config.schemas import ALLPAGES_RESPONSE_SCHEMA, ANNOTATION_REPORT_SCHEMA
from autolink.models.annotation_result import AnnotationResult
from autolink.models.inventory_io import InventoryPage
from autolink.models.protected_region import ProtectedRegion
from autolink.models.span import Span


class TestInventoryPage:
    def test_defaults(self):
        page = InventoryPage()
        assert page.names == []
        assert page.next_cursor is None

    def test_blank_names_dropped(self):
        page = InventoryPage(names=["Paris", "", "   ", "Lyon"])
        assert page.names == ["Paris", "Lyon"]

    def test_empty_cursor_means_last_page(self):
        assert InventoryPage(names=["Paris"], next_cursor="").next_cursor is None

    def test_cursor_kept(self):
        assert InventoryPage(next_cursor="Lyon").next_cursor == "Lyon"


class TestProtectedRegion:
    def test_placeholder(self):
        region = ProtectedRegion(index=7, kind="template", text="{{Infobox}}")
        assert region.placeholder == "__PROTECTED_7__"

    def test_frozen(self):
        region = ProtectedRegion(0, "link", "[[Paris]]")
        with pytest.raises(AttributeError):
            region.text = "[[Lyon]]"


class TestAnnotationResult:
    def test_to_dict(self):
        result = AnnotationResult(
            text="[[Paris]] and [[Lyon]]",
            inserted_count=2,
            spans=(Span(0, 5, "Paris"), Span(10, 14, "Lyon")),
            protected_count=0,
        )
        assert result.to_dict() == {
            "text": "[[Paris]] and [[Lyon]]",
            "inserted_count": 2,
            "protected_count": 0,
            "spans": [
                {"name": "Paris", "start": 0, "end": 5},
                {"name": "Lyon", "start": 10, "end": 14},
            ],
        }

    def test_default_spans_empty(self):
        assert AnnotationResult(text="x", inserted_count=0).spans == ()


class TestAllpagesSchema:
    def test_accepts_continuation_payload(self):
        validate(
            instance={
                "batchcomplete": "",
                "continue": {"apcontinue": "Lyon", "continue": "-||"},
                "query": {"allpages": [{"pageid": 1, "ns": 0, "title": "Paris"}]},
            },
            schema=ALLPAGES_RESPONSE_SCHEMA,
        )

    def test_accepts_error_payload(self):
        validate(
            instance={"error": {"code": "badvalue", "info": "Unrecognized value"}},
            schema=ALLPAGES_RESPONSE_SCHEMA,
        )

    def test_rejects_title_less_entry(self):
        with pytest.raises(ValidationError):
            validate(
                instance={"query": {"allpages": [{"pageid": 1}]}},
                schema=ALLPAGES_RESPONSE_SCHEMA,
            )

    def test_rejects_non_string_cursor(self):
        with pytest.raises(ValidationError):
            validate(
                instance={"continue": {"apcontinue": 5}},
                schema=ALLPAGES_RESPONSE_SCHEMA,
            )


class TestReportSchema:
    @pytest.fixture
    def report(self):
        return {
            "source": "page.wiki",
            "status": "success",
            "message": "Auto-link complete: 1 links added",
            "inserted_count": 1,
            "names_loaded": 2,
            "protected_count": 0,
            "spans": [{"name": "Paris", "start": 0, "end": 5}],
        }

    def test_valid_report(self, report):
        validate(instance=report, schema=ANNOTATION_REPORT_SCHEMA)

    def test_unknown_status_rejected(self, report):
        report["status"] = "partial"
        with pytest.raises(ValidationError):
            validate(instance=report, schema=ANNOTATION_REPORT_SCHEMA)

    def test_negative_count_rejected(self, report):
        report["inserted_count"] = -1
        with pytest.raises(ValidationError):
            validate(instance=report, schema=ANNOTATION_REPORT_SCHEMA)

    def test_missing_spans_rejected(self, report):
        del report["spans"]
        with pytest.raises(ValidationError):
            validate(instance=report, schema=ANNOTATION_REPORT_SCHEMA)
