"""
Response reduction and text diffing.
"""

from .diff import diff_text
from .reducer import get_body_text, get_header_text, get_status_text, reduce_response

__all__ = [
    "diff_text",
    "get_body_text",
    "get_header_text",
    "get_status_text",
    "reduce_response",
]
