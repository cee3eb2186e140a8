"""
Constants used across the annotation engine.
Pinned so that output stays byte-for-byte reproducible.
"""
import re

# =============================================================================
# Link syntax
# =============================================================================
LINK_OPEN: str = "[["
LINK_CLOSE: str = "]]"

# Titles outside the main namespace look like "Category:Foo" or "File:Bar.png"
NAMESPACE_SEPARATOR: str = ":"

# =============================================================================
# Placeholders
# =============================================================================
PLACEHOLDER_TEMPLATE: str = "__PROTECTED_{index}__"
PLACEHOLDER_PATTERN: re.Pattern = re.compile(r"__PROTECTED_(\d+)__")

# =============================================================================
# Name inventory retrieval
# =============================================================================
MAX_INVENTORY_PAGES: int = 100
DEFAULT_NAMESPACE: int = 0
NAME_CACHE_KEY_TEMPLATE: str = "autolink:names:ns:{namespace}"

# =============================================================================
# Notification levels
# =============================================================================
NOTIFY_LEVELS = ("info", "success", "warn", "error")
