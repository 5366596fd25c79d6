from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a calculation receives an input outside its domain."""
