"""
JSON Schemas for the MediaWiki inventory payload and the CLI report.

Two schemas:
1. ALLPAGES_RESPONSE_SCHEMA — one page of ``action=query&list=allpages``
2. ANNOTATION_REPORT_SCHEMA — the report written by run_autolink.py
"""

# =============================================================================
# 1. MediaWiki allpages response
# =============================================================================
ALLPAGES_RESPONSE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "batchcomplete": {},
        "continue": {
            "type": "object",
            "properties": {
                "apcontinue": {
                    "type": "string",
                    "description": "Cursor for the next page of titles",
                },
                "continue": {"type": "string"},
            },
        },
        "query": {
            "type": "object",
            "properties": {
                "allpages": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["title"],
                        "properties": {
                            "pageid": {"type": "integer"},
                            "ns": {"type": "integer"},
                            "title": {"type": "string"},
                        },
                    },
                },
            },
        },
        "error": {
            "type": "object",
            "properties": {
                "code": {"type": "string"},
                "info": {"type": "string"},
            },
        },
    },
}


# =============================================================================
# 2. Annotation report (CLI output)
# =============================================================================
ANNOTATION_REPORT_SCHEMA: dict = {
    "type": "object",
    "required": ["source", "status", "message", "inserted_count", "names_loaded", "spans"],
    "properties": {
        "source": {"type": "string"},
        "status": {"type": "string", "enum": ["success", "rejected", "noop"]},
        "message": {"type": "string"},
        "inserted_count": {"type": "integer", "minimum": 0},
        "names_loaded": {"type": "integer", "minimum": 0},
        "protected_count": {"type": "integer", "minimum": 0},
        "spans": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "start", "end"],
                "properties": {
                    "name": {"type": "string"},
                    "start": {"type": "integer", "minimum": 0},
                    "end": {"type": "integer", "minimum": 0},
                },
            },
        },
    },
}
