"""
Profile documents (xreq and xdiff YAML files).
"""

from .config import DiffConfig, DiffProfile, RequestConfig, ResponseProfile

__all__ = ["DiffConfig", "DiffProfile", "RequestConfig", "ResponseProfile"]
