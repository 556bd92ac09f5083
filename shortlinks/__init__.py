"""SQLite-backed storage and link handling for a self-hosted URL shortener."""

__version__ = "6.0.3"

__all__ = ["database", "links"]