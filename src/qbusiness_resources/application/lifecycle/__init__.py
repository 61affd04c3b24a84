"""Resource lifecycle orchestration."""

from .orchestrator import STEP_PLANS, LifecycleOrchestrator

__all__ = ["LifecycleOrchestrator", "STEP_PLANS"]
