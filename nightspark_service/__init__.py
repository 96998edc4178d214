"""NightSpark event discovery service."""

from nightspark_service.plan_store import PlanStore

__all__ = ["PlanStore"]
