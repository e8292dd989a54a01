"""Core Layer — calculator definitions, evaluators, units and formatting.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Evaluators are pure and deterministic: no IO, no clock, no randomness

Design Decisions:
    - Pure evaluators behind a thin async shell, so the same code serves HTTP and tests
"""
