"""QBusiness Resource Handlers - Root Package.

This package implements the lifecycle handlers that an infrastructure-as-code
control plane invokes to create, read, update, delete and list Amazon Q
Business resources (applications, indices, data sources, retrievers, plugins,
web experiences and data accessors).

Key Components:
    - Stabilization poller: bounded, externally resumed status polling
    - Tag reconciler: layered tag merge and minimal tag deltas
    - Error classifier: maps remote failures to a closed taxonomy
    - Lifecycle orchestrator: mutate -> stabilize -> tags -> read-back

Long-running operations never block in-process. Each invocation returns an
operation context that the host re-submits until a terminal outcome.
"""

__version__ = "1.0.0"
