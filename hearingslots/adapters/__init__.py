"""
Adapters layer - Sources of existing hearings (JSON export, registry API, memory).
"""

from .http_source import HttpHearingSource
from .json_source import JsonHearingSource
from .memory_store import InMemoryHearingStore

__all__ = ["HttpHearingSource", "JsonHearingSource", "InMemoryHearingStore"]
