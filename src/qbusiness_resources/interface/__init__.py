"""Host-facing entry points."""

from .handler_entrypoint import handle_request

__all__ = ["handle_request"]
