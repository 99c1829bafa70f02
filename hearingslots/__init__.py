"""
hearingslots - free-slot search and conflict detection for courtroom hearings.
"""

__version__ = "0.1.0"
