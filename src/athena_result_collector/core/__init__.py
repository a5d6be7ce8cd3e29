"""Paging primitives, models and HTTP clients."""

__all__: list[str] = []
