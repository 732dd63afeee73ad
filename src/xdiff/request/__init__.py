"""
Request construction: overrides, profiles and the HTTP executor.
"""

from .executor import send
from .overrides import Override, OverrideKind, OverrideSet, parse_override
from .profile import MergedRequest, RequestProfile

__all__ = [
    "send",
    "Override",
    "OverrideKind",
    "OverrideSet",
    "parse_override",
    "MergedRequest",
    "RequestProfile",
]
