"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .scheduling import HearingSchedulerService, HearingSourceProtocol, HearingStoreProtocol

__all__ = ["HearingSchedulerService", "HearingSourceProtocol", "HearingStoreProtocol"]
