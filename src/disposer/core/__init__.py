"""
Registry core.

Components:
- ports.py: capability Protocols the registry accepts
- models.py: TaskKind, Entry, classify()
- dispatch.py: teardown per kind
- registry.py: Registry
- tracing.py: trace switch and sink
"""
