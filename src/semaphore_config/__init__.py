"""
semaphore-config — configuration resolution core for the Semaphore server.

File: src/semaphore_config/__init__.py
Last updated: 2026-10-17

Purpose
- Package root. Defines public package-level metadata and import boundaries.

What should be included in this file
- Version export and a minimal public API surface.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
