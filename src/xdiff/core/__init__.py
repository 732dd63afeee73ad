"""
xdiff core: settings, logging, exceptions and shared models.
"""
