"""
Schemas Package

JSON schema for grammar descriptors and validation utilities.
"""

from .validator import validate_grammar, SYMBOL_KEYS

__all__ = [
    "validate_grammar",
    "SYMBOL_KEYS",
]
