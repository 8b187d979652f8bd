"""Ingestion layer.

Adapters that turn external inputs (the conference location URL) into
settings patches.
"""

__all__: list[str] = []
