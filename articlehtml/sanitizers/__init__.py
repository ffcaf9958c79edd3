"""HTML sanitizers for publishing and display."""

from articlehtml.sanitizers.display import (
    DisplaySanitizer,
    extract_text,
    sanitize_for_display,
)
from articlehtml.sanitizers.publish import sanitize_for_publish

__all__ = [
    "DisplaySanitizer",
    "extract_text",
    "sanitize_for_display",
    "sanitize_for_publish",
]
