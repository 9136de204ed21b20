"""Engagement service: load, apply a core operation, persist."""

from .service import EngagementService, create_engagement_service


__all__ = ["EngagementService", "create_engagement_service"]
