"""Domain layer - lifecycle values, ports and exceptions."""
