"""
Document-management backend: ingestion job orchestration.

Coordinates long-running ingestion jobs between a local record store and a
remote ingestion worker.
"""
