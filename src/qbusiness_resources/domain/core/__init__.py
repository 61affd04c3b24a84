"""Core domain exceptions."""
