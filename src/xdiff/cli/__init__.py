"""
xdiff command-line interfaces.
"""
