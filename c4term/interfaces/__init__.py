"""
c4term.interfaces - User interfaces for Connect Four

Only the command line interface lives here for now.
"""

# Don't import anything here to avoid circular imports
__all__ = []
