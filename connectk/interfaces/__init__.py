"""
connectk.interfaces - User interfaces for connectk

This package contains the command-line interface for playing against the
engines and comparing them.
"""

# Don't import anything here to avoid circular imports
__all__ = []
