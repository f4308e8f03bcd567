"""Local persistence helpers."""

from festmap.persistence.cache import load_cached_document, write_cached_document

__all__ = ["load_cached_document", "write_cached_document"]
