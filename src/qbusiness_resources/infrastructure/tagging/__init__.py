"""Tag reconciliation."""

from .tag_reconciler import TagReconciler

__all__ = ["TagReconciler"]
