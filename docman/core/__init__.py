"""
Core domain layer.

Job status vocabulary, worker transition table, per-id locking and the
exception hierarchy shared by the orchestrator and the worker.
"""
