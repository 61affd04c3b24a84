"""Application layer: operation orchestration."""
