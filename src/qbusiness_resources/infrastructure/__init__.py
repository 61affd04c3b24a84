"""Infrastructure layer: tagging, error classification and stabilization."""
