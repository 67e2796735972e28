"""
Utilities Package

Descriptor (de)serialization for the core models.
"""

from .serialization import deserialize_grammar, serialize_grammar

__all__ = [
    "deserialize_grammar",
    "serialize_grammar",
]
