"""Core utilities."""

from .serialization import serialize_fields, deserialize_fields, dumps_form

__all__ = ["serialize_fields", "deserialize_fields", "dumps_form"]
