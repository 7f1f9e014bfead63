"""
The VIEW layer renders diagnostics (matplotlib). It is never imported by the
numeric core.
"""
