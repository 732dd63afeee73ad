"""
xdiff - HTTP request profiles and response diffing.

Runs named request profiles from a YAML document, either printing a single
response (xreq) or comparing the responses of a profile pair (xdiff).
"""

__version__ = "0.1.0"

from .comparison.diff import diff_text
from .comparison.reducer import get_body_text, get_header_text, get_status_text, reduce_response
from .core.exceptions import XDiffException
from .request.overrides import Override, OverrideKind, OverrideSet, parse_override
from .request.profile import MergedRequest, RequestProfile
from .store.config import DiffConfig, DiffProfile, RequestConfig, ResponseProfile

__all__ = [
    "__version__",
    "diff_text",
    "get_body_text",
    "get_header_text",
    "get_status_text",
    "reduce_response",
    "XDiffException",
    "Override",
    "OverrideKind",
    "OverrideSet",
    "parse_override",
    "MergedRequest",
    "RequestProfile",
    "DiffConfig",
    "DiffProfile",
    "RequestConfig",
    "ResponseProfile",
]
