"""
Boundary layer for external system integrations.

Handles all interactions with external systems (record store, ingestion worker).
Provides adapters and clients for infrastructure dependencies.
"""
