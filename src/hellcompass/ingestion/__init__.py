"""Ingestion layer.

Adapters that take raw payloads from the geolocation, orientation and
motion channels and turn them into domain readings for the state store.
"""

__all__: list[str] = []
