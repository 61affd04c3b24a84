"""Error classification."""

from .error_classifier import ClassifiedError, ErrorClassifier

__all__ = ["ClassifiedError", "ErrorClassifier"]
